"""
Smoke tests for the SQLRepository against a temporary SQLite database.
"""
from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy.exc import IntegrityError

from contatos.db.models import Contact
from contatos.domain.contacts import PageRequest
from contatos.repositories.sql_repository import SQLRepository


def _contact(owner_id: int, name: str, cpf: str, **extra) -> Contact:
    now = datetime.now(timezone.utc)
    fields = dict(
        owner_id=owner_id,
        name=name,
        cpf=cpf,
        phone="41999887766",
        postal_code="80010000",
        street="Rua XV de Novembro",
        number="100",
        complement=None,
        neighborhood="Centro",
        city="Curitiba",
        region="PR",
        latitude=-25.4284,
        longitude=-49.2733,
        created_at=now,
        updated_at=now,
    )
    fields.update(extra)
    return Contact(**fields)


def test_user_flow(temp_db):
    repo = SQLRepository()
    assert not repo.email_exists("alice@example.com")
    user = repo.create_user("Alice", "alice@example.com", "hash")
    assert user.id is not None
    assert repo.email_exists("alice@example.com")
    assert repo.get_user_by_email("alice@example.com").id == user.id

    repo.update_user_password(user.id, "other-hash")
    assert repo.get_user(user.id).password_hash == "other-hash"


def test_duplicate_email_is_rejected(temp_db):
    repo = SQLRepository()
    repo.create_user("Alice", "alice@example.com", "hash")
    with pytest.raises(IntegrityError):
        repo.create_user("Alice 2", "alice@example.com", "hash")


def test_session_registry(temp_db):
    repo = SQLRepository()
    user = repo.create_user("Alice", "alice@example.com", "hash")
    expires = datetime.now(timezone.utc) + timedelta(hours=1)
    repo.create_user_session("tok123", user.id, expires)

    entity = repo.get_user_session("tok123")
    assert entity is not None
    assert entity.user_id == user.id

    repo.delete_user_session("tok123")
    assert repo.get_user_session("tok123") is None


def test_contact_crud(temp_db):
    repo = SQLRepository()
    owner = repo.create_user("Alice", "alice@example.com", "hash")

    saved = repo.save_contact(_contact(owner.id, "Ana", "11144477735"))
    assert saved.id is not None
    assert repo.contact_cpf_exists(owner.id, "11144477735")
    assert not repo.contact_cpf_exists(owner.id, "11144477735", exclude_id=saved.id)

    saved.phone = "41988776655"
    repo.save_contact(saved)
    assert repo.get_contact(saved.id).phone == "41988776655"

    repo.delete_contact(saved)
    assert repo.get_contact(saved.id) is None
    assert not repo.contact_cpf_exists(owner.id, "11144477735")


def test_cpf_unique_per_owner(temp_db):
    repo = SQLRepository()
    alice = repo.create_user("Alice", "alice@example.com", "hash")
    bob = repo.create_user("Bob", "bob@example.com", "hash")

    repo.save_contact(_contact(alice.id, "Ana", "11144477735"))
    repo.save_contact(_contact(bob.id, "Ana", "11144477735"))
    with pytest.raises(IntegrityError):
        repo.save_contact(_contact(alice.id, "Outra Ana", "11144477735"))


def test_pages_are_scoped_to_owner(temp_db):
    repo = SQLRepository()
    alice = repo.create_user("Alice", "alice@example.com", "hash")
    bob = repo.create_user("Bob", "bob@example.com", "hash")
    for name, cpf in (("Carla", "52998224725"), ("Ana", "11144477735"), ("Bruno", "12345678909")):
        repo.save_contact(_contact(alice.id, name, cpf))
    repo.save_contact(_contact(bob.id, "Zeca", "11144477735"))

    first = repo.find_contacts_by_owner(alice.id, PageRequest(page=0, size=2))
    assert [c.name for c in first.items] == ["Ana", "Bruno"]
    assert first.total_elements == 3
    assert first.total_pages == 2

    last = repo.find_contacts_by_owner(alice.id, PageRequest(page=1, size=2, sort_field="name", descending=True))
    assert [c.name for c in last.items] == ["Ana"]

    empty = repo.find_contacts_by_owner(alice.id, PageRequest(page=5, size=2))
    assert empty.items == []
    assert empty.total_elements == 3


def test_search_matches_name_or_cpf(temp_db):
    repo = SQLRepository()
    alice = repo.create_user("Alice", "alice@example.com", "hash")
    repo.save_contact(_contact(alice.id, "Maria Souza", "52998224725"))
    repo.save_contact(_contact(alice.id, "José 100%", "11144477735"))

    assert [c.name for c in repo.search_contacts_by_owner(alice.id, "SOUZA", PageRequest()).items] == ["Maria Souza"]
    assert [c.name for c in repo.search_contacts_by_owner(alice.id, "4447", PageRequest()).items] == ["José 100%"]
    # wildcard characters are matched literally
    assert [c.name for c in repo.search_contacts_by_owner(alice.id, "%", PageRequest()).items] == ["José 100%"]
    assert repo.search_contacts_by_owner(alice.id, "_", PageRequest()).total_elements == 0


def test_delete_user_cascades(temp_db):
    repo = SQLRepository()
    alice = repo.create_user("Alice", "alice@example.com", "hash")
    bob = repo.create_user("Bob", "bob@example.com", "hash")
    mine = repo.save_contact(_contact(alice.id, "Ana", "11144477735"))
    theirs = repo.save_contact(_contact(bob.id, "Bia", "11144477735"))
    repo.create_user_session("tok-alice", alice.id, datetime.now(timezone.utc) + timedelta(hours=1))

    repo.delete_user(alice.id)

    assert repo.get_user(alice.id) is None
    assert repo.get_contact(mine.id) is None
    assert repo.get_user_session("tok-alice") is None
    assert repo.get_contact(theirs.id) is not None
