"""High-level data access helpers backed by SQLAlchemy."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import delete, func, or_, select, update

from contatos.db.models import Contact, User, UserSession
from contatos.db.session import get_session
from contatos.domain.contacts import Page, PageRequest


class SQLRepository:
    """CRUD helpers wrapping the SQLAlchemy session."""

    # -------------------------- users --------------------------
    def get_user(self, user_id: int) -> Optional[User]:
        with get_session() as session:
            return session.get(User, user_id)

    def get_user_by_email(self, email: str) -> Optional[User]:
        with get_session() as session:
            stmt = select(User).where(User.email == email)
            return session.execute(stmt).scalar_one_or_none()

    def email_exists(self, email: str) -> bool:
        with get_session() as session:
            stmt = select(User.id).where(User.email == email).limit(1)
            return session.execute(stmt).first() is not None

    def create_user(self, name: str, email: str, password_hash: str) -> User:
        now = datetime.now(timezone.utc)
        user = User(name=name, email=email, password_hash=password_hash, created_at=now, updated_at=now)
        with get_session() as session:
            session.add(user)
            session.commit()
            session.refresh(user)
            return user

    def update_user_password(self, user_id: int, password_hash: str) -> None:
        with get_session() as session:
            stmt = (
                update(User)
                .where(User.id == user_id)
                .values(password_hash=password_hash, updated_at=datetime.now(timezone.utc))
            )
            session.execute(stmt)
            session.commit()

    def delete_user(self, user_id: int) -> None:
        """Remove the user together with their sessions and contacts."""
        with get_session() as session:
            session.execute(delete(UserSession).where(UserSession.user_id == user_id))
            session.execute(delete(Contact).where(Contact.owner_id == user_id))
            session.execute(delete(User).where(User.id == user_id))
            session.commit()

    # -------------------------- sessions --------------------------
    def create_user_session(self, token: str, user_id: int, expires_at: datetime) -> None:
        with get_session() as session:
            session.add(UserSession(token=token, user_id=user_id, expires_at=expires_at))
            session.commit()

    def get_user_session(self, token: str) -> Optional[UserSession]:
        with get_session() as session:
            return session.get(UserSession, token)

    def delete_user_session(self, token: str) -> None:
        with get_session() as session:
            session.execute(delete(UserSession).where(UserSession.token == token))
            session.commit()

    # -------------------------- contacts --------------------------
    def get_contact(self, contact_id: int) -> Optional[Contact]:
        with get_session() as session:
            return session.get(Contact, contact_id)

    def find_contacts_by_owner(self, owner_id: int, page_request: PageRequest) -> Page[Contact]:
        return self._page(Contact.owner_id == owner_id, page_request)

    def search_contacts_by_owner(self, owner_id: int, term: str, page_request: PageRequest) -> Page[Contact]:
        matches = or_(
            func.lower(Contact.name).contains(term.lower(), autoescape=True),
            Contact.cpf.contains(term, autoescape=True),
        )
        return self._page((Contact.owner_id == owner_id) & matches, page_request)

    def contact_cpf_exists(self, owner_id: int, cpf: str, *, exclude_id: int | None = None) -> bool:
        with get_session() as session:
            stmt = select(Contact.id).where(Contact.owner_id == owner_id, Contact.cpf == cpf)
            if exclude_id is not None:
                stmt = stmt.where(Contact.id != exclude_id)
            return session.execute(stmt.limit(1)).first() is not None

    def save_contact(self, contact: Contact) -> Contact:
        with get_session() as session:
            if contact.id is None:
                session.add(contact)
            else:
                contact = session.merge(contact)
            session.commit()
            session.refresh(contact)
            return contact

    def delete_contact(self, contact: Contact) -> None:
        with get_session() as session:
            session.execute(delete(Contact).where(Contact.id == contact.id))
            session.commit()

    def _page(self, criteria, page_request: PageRequest) -> Page[Contact]:
        column = getattr(Contact, page_request.sort_field)
        order = column.desc() if page_request.descending else column.asc()
        with get_session() as session:
            total = session.execute(select(func.count()).select_from(Contact).where(criteria)).scalar_one()
            stmt = (
                select(Contact)
                .where(criteria)
                .order_by(order, Contact.id.asc())
                .offset(page_request.offset)
                .limit(page_request.size)
            )
            items = list(session.execute(stmt).scalars().all())
        return Page(items=items, page=page_request.page, size=page_request.size, total_elements=total)
