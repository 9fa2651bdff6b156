"""
Integration tests for UserRepository against an in-memory SQLite database.

This module tests persistence with comprehensive coverage:
- Save (insert and update by surrogate id) with community memberships
- Lookup by email and by user id with communities
- Pagination with stable ordering
- Unique email and user id constraint reporting
"""

import pytest

from user_accounts.core.exceptions import (
    EmailAlreadyExistsException,
    UserIdAlreadyExistsException,
)
from user_accounts.db.base import Community as DbCommunity
from user_accounts.domain.entities import Community, User
from user_accounts.domain.pagination import PageRequest
from tests.factories.repository_factories import get_test_community

pytestmark = [pytest.mark.integration, pytest.mark.repositories, pytest.mark.user]


def _user(index: int, **overrides) -> User:
    values = {
        "name": f"User {index}",
        "user_id": f"user-{index}",
        "email": f"user{index}@example.com",
        "encrypted_password": f"hash-{index}",
    }
    values.update(overrides)
    return User(**values)


class TestUserRepositorySave:
    def test_save_assigns_surrogate_id(self, user_repo):
        saved = user_repo.save(_user(1))

        assert saved.id is not None
        assert saved.user_id == "user-1"
        assert saved.encrypted_password == "hash-1"
        assert saved.communities == set()

    def test_save_persists_communities(self, user_repo):
        user = _user(1)
        first = get_test_community(user)
        second = get_test_community(user)

        saved = user_repo.save(user)

        assert saved.community_ids == {first.community_id, second.community_id}

    def test_save_reuses_existing_community_rows(self, user_repo, db_session):
        shared = Community(community_id="shared-community", name="Shared")
        first_user = _user(1, communities={shared})
        second_user = _user(2, communities={Community(community_id="shared-community")})

        user_repo.save(first_user)
        user_repo.save(second_user)

        assert db_session.query(DbCommunity).count() == 1
        stored = db_session.query(DbCommunity).one()
        assert {u.user_id for u in stored.users} == {"user-1", "user-2"}

    def test_save_updates_existing_user(self, user_repo):
        saved = user_repo.save(_user(1))

        updated = user_repo.save(_user(1, name="Renamed", id=saved.id))

        assert updated.name == "Renamed"
        assert user_repo.find_all(PageRequest()).total_elements == 1

    def test_save_rejects_changed_user_id(self, user_repo):
        saved = user_repo.save(_user(1))

        with pytest.raises(ValueError, match="cannot be changed"):
            user_repo.save(_user(1, user_id="user-other", id=saved.id))

    def test_save_new_user_with_taken_user_id_keeps_stored_user(
        self, user_repo, db_session
    ):
        original = _user(1)
        member_of = get_test_community(original).community_id
        user_repo.save(original)

        with pytest.raises(UserIdAlreadyExistsException) as exc_info:
            user_repo.save(
                _user(1, email="intruder@example.com", encrypted_password="other")
            )

        assert exc_info.value.error_code == 409
        db_session.expunge_all()
        stored = user_repo.find_by_user_id_with_communities("user-1")
        assert stored.email == "user1@example.com"
        assert stored.encrypted_password == "hash-1"
        assert stored.community_ids == {member_of}
        assert user_repo.find_all(PageRequest()).total_elements == 1

    def test_save_collapses_communities_with_same_id(self, user_repo, db_session):
        user = _user(
            1,
            communities={
                Community(community_id="c1", name="A"),
                Community(community_id="c1", name="B"),
            },
        )

        saved = user_repo.save(user)

        assert saved.community_ids == {"c1"}
        assert db_session.query(DbCommunity).count() == 1

    def test_save_requires_user_id(self, user_repo):
        with pytest.raises(ValueError, match="User ID is required"):
            user_repo.save(_user(1, user_id=""))

    def test_duplicate_email_is_rejected_by_constraint(self, user_repo):
        user_repo.save(_user(1, email="taken@example.com"))

        with pytest.raises(EmailAlreadyExistsException, match="419"):
            user_repo.save(_user(2, email="taken@example.com"))

        # Session is usable after the rollback
        assert user_repo.exists_by_email("taken@example.com")
        assert user_repo.find_by_user_id_with_communities("user-2") is None


class TestUserRepositoryReads:
    def test_exists_by_email(self, user_repo):
        user_repo.save(_user(1))

        assert user_repo.exists_by_email("user1@example.com")
        assert not user_repo.exists_by_email("other@example.com")

    def test_find_by_email(self, user_repo):
        user_repo.save(_user(1))

        found = user_repo.find_by_email("user1@example.com")

        assert found is not None
        assert found.user_id == "user-1"
        assert user_repo.find_by_email("other@example.com") is None

    @pytest.mark.parametrize("community_count", [0, 1, 3])
    def test_find_by_user_id_with_communities(
        self, user_repo, db_session, community_count
    ):
        user = _user(1)
        expected = {get_test_community(user).community_id for _ in range(community_count)}
        user_repo.save(user)
        db_session.expunge_all()

        found = user_repo.find_by_user_id_with_communities("user-1")

        assert found is not None
        assert found.community_ids == expected

    def test_find_by_user_id_missing(self, user_repo):
        assert user_repo.find_by_user_id_with_communities("missing") is None


class TestUserRepositoryPagination:
    def test_find_all_empty(self, user_repo):
        page = user_repo.find_all(PageRequest.of(0, 200))

        assert page.content == []
        assert page.total_elements == 0

    def test_find_all_slices_in_insertion_order(self, user_repo):
        for index in range(5):
            user_repo.save(_user(index))

        first = user_repo.find_all(PageRequest.of(0, 2))
        last = user_repo.find_all(PageRequest.of(2, 2))
        beyond = user_repo.find_all(PageRequest.of(3, 2))

        assert [u.user_id for u in first.content] == ["user-0", "user-1"]
        assert [u.user_id for u in last.content] == ["user-4"]
        assert beyond.content == []
        assert first.total_elements == 5
        assert first.total_pages == 3
        assert first.has_next
        assert not last.has_next
