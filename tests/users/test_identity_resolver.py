from __future__ import annotations

import pytest

from smate_clock.auth.claims import VerifiedClaims
from smate_clock.core.enums import Role
from smate_clock.core.exceptions import UnauthorizedError
from smate_clock.users.service import IdentityResolver


def test_resolve_provisions_unknown_subject_as_care(users_repo):
    resolver = IdentityResolver(users_repo)

    user = resolver.resolve(VerifiedClaims(subject="auth0|new", email="new@x.test", name="New", role_claim="MANAGER"))

    assert user.auth_subject == "auth0|new"
    assert user.email == "new@x.test"
    assert user.name == "New"
    # Role claims are ignored on the implicit path.
    assert user.role == Role.CARE


def test_resolve_synthesizes_email_when_claim_missing(users_repo):
    user = IdentityResolver(users_repo).resolve(VerifiedClaims(subject="auth0|abc"))

    assert user.email == "auth0|abc@auth.local"


def test_resolve_returns_existing_user_without_changes(users_repo, manager):
    resolver = IdentityResolver(users_repo)

    user = resolver.resolve(VerifiedClaims(subject="auth0|manager", email="other@x.test", role_claim="CARE"))

    assert user == manager
    assert len(users_repo.all()) == 1


@pytest.mark.parametrize("claims", [None, VerifiedClaims(subject="")])
def test_missing_claims_are_unauthorized(users_repo, claims):
    resolver = IdentityResolver(users_repo)

    with pytest.raises(UnauthorizedError):
        resolver.resolve(claims)
    with pytest.raises(UnauthorizedError):
        resolver.first_login(claims)


def test_first_login_honors_role_claim(users_repo):
    user = IdentityResolver(users_repo).first_login(
        VerifiedClaims(subject="auth0|boss", email="boss@x.test", name="Boss", role_claim="MANAGER")
    )

    assert user.role == Role.MANAGER


def test_first_login_defaults_to_care(users_repo):
    user = IdentityResolver(users_repo).first_login(VerifiedClaims(subject="auth0|c", role_claim="superuser"))

    assert user.role == Role.CARE
    assert user.email == "auth0|c@auth.local"


def test_first_login_updates_existing_user(users_repo, care_user):
    resolver = IdentityResolver(users_repo)

    user = resolver.first_login(
        VerifiedClaims(subject="auth0|care", email="lead@x.test", name="Lead", role_claim="MANAGER")
    )

    assert user.user_id == care_user.user_id
    assert (user.email, user.name, user.role) == ("lead@x.test", "Lead", Role.MANAGER)
    assert user.created_at == care_user.created_at


def test_first_login_is_idempotent(users_repo, clock):
    resolver = IdentityResolver(users_repo)
    claims = VerifiedClaims(subject="auth0|same", email="same@x.test", name="Same", role_claim="MANAGER")

    first = resolver.first_login(claims)
    clock.advance(minutes=5)
    second = resolver.first_login(claims)

    assert (second.user_id, second.auth_subject, second.email, second.name, second.role, second.created_at) == (
        first.user_id,
        first.auth_subject,
        first.email,
        first.name,
        first.role,
        first.created_at,
    )
    assert len(users_repo.all()) == 1
