"""
Tests for version dispatch and per-version projection rules.
"""

from datetime import datetime, timezone

import pytest

from api.graphql.types import PostFilterInput, UserInput
from api.middleware.context import ApiVersion, RequestContext
from api.versions import V1Resolvers, V2Resolvers, resolver_class_for
from api.versions.base import filters_from, payload_from
from modules.posts.models import PostFilter
from modules.users.models import Gender, User
from shared.pagination import InvalidFilterError

from tests.conftest import user_doc

WHEN = datetime(2024, 3, 7, 8, 30, tzinfo=timezone.utc)


def make_user(**extra) -> User:
    return User.from_document({"id": "u1", **user_doc(gender="male", **extra)})


@pytest.fixture
def v1_fr(container):
    return container.resolvers_for(RequestContext(ApiVersion.V1, "fr"))


@pytest.fixture
def v2_fr(container):
    return container.resolvers_for(RequestContext(ApiVersion.V2, "fr"))


class TestDispatch:
    def test_resolver_class_for(self):
        assert resolver_class_for(ApiVersion.V1) is V1Resolvers
        assert resolver_class_for(ApiVersion.V2) is V2Resolvers

    def test_container_builds_version_set(self, v1_fr, v2_fr):
        assert isinstance(v1_fr, V1Resolvers)
        assert isinstance(v2_fr, V2Resolvers)
        assert v2_fr.context.locale == "fr"


class TestProjections:
    def test_v1_translates_enum(self, v1_fr):
        assert v1_fr.render_enum(Gender.MALE) == "homme"
        assert v1_fr.render_enum(None) is None

    def test_v1_formats_dates_for_locale(self, v1_fr):
        assert v1_fr.render_date(WHEN) == "07/03/2024"

    def test_v2_raw_values(self, v2_fr):
        assert v2_fr.render_enum(Gender.MALE) == "male"
        assert v2_fr.render_date(WHEN) == "2024-03-07T08:30:00+00:00"
        assert v2_fr.render_date(None) is None

    def test_list_email_rule(self, v1_fr, v2_fr):
        user = make_user()

        assert v1_fr.project_user(user, in_list=True).email == "ada@example.com"
        assert v2_fr.project_user(user, in_list=True).email is None
        assert v2_fr.project_user(user).email == "ada@example.com"

    def test_project_location(self, v2_fr):
        user = make_user(location={"city": "London", "country": "UK"})

        projected = v2_fr.project_user(user)

        assert projected.location.city == "London"
        assert projected.location.street is None

    def test_error_locale(self, v1_fr, v2_fr):
        assert v1_fr.localize_error("userNotFound", "User not found") == "Utilisateur non trouvé"
        assert v2_fr.localize_error("userNotFound", "User not found") == "User not found"

    def test_unknown_error_key_uses_fallback(self, v1_fr):
        assert v1_fr.localize_error("noSuchKey", "Fallback") == "Fallback"
        assert v1_fr.localize_error(None, "Fallback") == "Fallback"

    def test_api_info(self, v2_fr):
        info = v2_fr.api_info()
        assert info.version == "2.0"
        assert info.deprecated is False


class TestInputConversion:
    def test_payload_drops_unset_fields(self):
        data = UserInput(first_name="Ada", email="ada@example.com")
        assert payload_from(data) == {"first_name": "Ada", "email": "ada@example.com"}

    def test_payload_of_none(self):
        assert payload_from(None) == {}

    def test_filters_from(self):
        result = filters_from(PostFilter, PostFilterInput(tags=["py"], publish_date="2024-01-01"))
        assert result == {"tags": ["py"], "publish_date": "2024-01-01"}

    def test_bad_filter_value(self):
        with pytest.raises(InvalidFilterError) as exc_info:
            filters_from(PostFilter, PostFilterInput(tags=[123]))
        assert exc_info.value.message_key == "invalidFilterValue"
