"""
FastAPI routers grouped by domain (auth, contacts, addresses, account).

Each module exposes an APIRouter included by app.py under the /api prefix.
"""
