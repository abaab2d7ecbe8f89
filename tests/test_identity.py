"""Tests for caller identity and the bearer-token adapter."""

import jwt
import pytest

from todolist_service.config import Settings
from todolist_service.errors import Unauthorized
from todolist_service.identity import CallerIdentity, authenticate, identity_from_claims, issue_token
from todolist_service.identity.claims import extract_bearer_token

SECRET = "identity-test-secret-thirty-two-bytes-long"


class TestCallerIdentity:
    def test_owner_prefers_oid(self):
        assert CallerIdentity(name="Alice", object_id="oid-1").owner_id == "oid-1"

    def test_owner_falls_back_to_name(self):
        ident = CallerIdentity(name="Alice")
        assert ident.owner_id == "Alice"
        assert ident.oid_only_owner_id is None


class TestIdentityFromClaims:
    def test_scopes_split_on_space(self):
        ident = identity_from_claims({"scp": "ToDo.Read ToDo.Write"})
        assert ident.scopes == {"ToDo.Read", "ToDo.Write"}

    def test_missing_scope_claim_is_empty(self):
        assert identity_from_claims({"name": "x"}).scopes == frozenset()

    def test_roles_list_or_string(self):
        assert identity_from_claims({"roles": ["a", "b"]}).roles == {"a", "b"}
        assert identity_from_claims({"roles": "a"}).roles == {"a"}

    def test_name_fallback(self):
        assert identity_from_claims({"preferred_username": "al@x"}).name == "al@x"
        assert identity_from_claims({}).name == ""

    def test_oid(self):
        assert identity_from_claims({"oid": "abc"}).object_id == "abc"
        assert identity_from_claims({}).object_id is None


class TestBearerToken:
    def test_extract(self):
        assert extract_bearer_token("Bearer abc") == "abc"
        assert extract_bearer_token("bearer  abc ") == "abc"

    @pytest.mark.parametrize("header", [None, "", "Basic abc", "Bearer"])
    def test_extract_rejects(self, header):
        with pytest.raises(Unauthorized):
            extract_bearer_token(header)

    def test_authenticate(self):
        token = issue_token(SECRET, name="Alice", oid="alice", scopes=["ToDo.Read"], roles=["r"])
        ident = authenticate(f"Bearer {token}", Settings(jwt_secret=SECRET))
        assert ident == CallerIdentity(
            name="Alice", object_id="alice",
            scopes=frozenset({"ToDo.Read"}), roles=frozenset({"r"}),
        )

    def test_wrong_secret(self):
        token = issue_token("another-secret-that-is-also-long-enough", name="x")
        with pytest.raises(Unauthorized):
            authenticate(f"Bearer {token}", Settings(jwt_secret=SECRET))

    def test_audience_checked_when_configured(self):
        settings = Settings(jwt_secret=SECRET, jwt_audience="api://todo")
        good = issue_token(SECRET, name="x", aud="api://todo")
        bad = issue_token(SECRET, name="x", aud="api://other")
        assert authenticate(f"Bearer {good}", settings).name == "x"
        with pytest.raises(Unauthorized):
            authenticate(f"Bearer {bad}", settings)

    def test_issued_token_claims(self):
        token = issue_token(SECRET, name="A", oid="o", scopes=["s1", "s2"])
        claims = jwt.decode(token, SECRET, algorithms=["HS256"])
        assert claims == {"name": "A", "oid": "o", "scp": "s1 s2"}
