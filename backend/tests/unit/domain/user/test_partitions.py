"""Unit tests for public/private partitions."""

import pytest

from domain.user.core.exceptions.user_errors import InvalidUserPropertiesError
from domain.user.core.value_objects.partitions import (
    PrivatePartition,
    PublicPartition,
    normalize_properties,
    with_private_email,
)


class TestPartitions:
    """Test reserved-field handling of partitions."""

    def test_from_dict_splits_reserved_fields(self):
        public = PublicPartition.from_dict({"id": "u1", "updated_at": 5, "name": "A"})

        assert public.id == "u1"
        assert public.updated_at == 5
        assert public.created_at is None
        assert public.fields == {"name": "A"}

    def test_to_dict_omits_unset_reserved_fields(self):
        private = PrivatePartition(fields={"phone": "123"})

        assert private.to_dict() == {"phone": "123"}

    def test_reserved_fields_win_over_free_fields(self):
        public = PublicPartition(id="u1", fields={"name": "A"})
        public.fields["id"] = "spoofed"

        assert public.to_dict()["id"] == "u1"

    def test_setitem_routes_reserved_keys(self):
        private = PrivatePartition()
        private["email"] = "a@x.com"
        private["phone"] = "123"

        assert private.email == "a@x.com"
        assert private.fields == {"phone": "123"}

    def test_mapping_access(self):
        public = PublicPartition(id="u1", fields={"name": "A"})

        assert public["name"] == "A"
        assert public["id"] == "u1"
        assert "name" in public
        assert "created_at" not in public
        assert public.get("missing", "x") == "x"
        with pytest.raises(KeyError):
            public["created_at"]

    def test_update_merges(self):
        public = PublicPartition(id="u1", fields={"name": "A"})
        public.update({"name": "B", "age": 3})

        assert public.to_dict() == {"name": "B", "age": 3, "id": "u1"}

    def test_id_cannot_be_set_through_mapping(self):
        public = PublicPartition(id="u1")

        with pytest.raises(InvalidUserPropertiesError):
            public["id"] = "other"
        with pytest.raises(InvalidUserPropertiesError):
            public.update({"id": "other"})

        assert public.id == "u1"


class TestNormalizeProperties:
    """Test construction-time normalization."""

    def test_key_becomes_public_id(self):
        public, private = normalize_properties("K", {"public": {}, "private": {}})

        assert public.id == "K"
        assert public.to_dict() == {"id": "K"}
        assert private.to_dict() == {}

    def test_top_level_and_caller_ids_are_discarded(self):
        public, _ = normalize_properties("K", {"id": "top", "public": {"id": "caller"}})

        assert public.id == "K"

    @pytest.mark.parametrize("properties", [None, {}, {"public": None, "private": None}])
    def test_missing_partitions_default_to_empty(self, properties):
        public, private = normalize_properties("K", properties)

        assert public.to_dict() == {"id": "K"}
        assert private.to_dict() == {}

    def test_input_is_not_mutated(self):
        properties = {"public": {"name": "A", "tags": ["x"]}, "private": {}}
        public, _ = normalize_properties("K", properties)
        public.fields["tags"].append("y")

        assert properties == {"public": {"name": "A", "tags": ["x"]}, "private": {}}

    def test_non_mapping_partition_raises(self):
        with pytest.raises(InvalidUserPropertiesError, match="'public' must be a mapping"):
            normalize_properties("K", {"public": ["a"]})

    def test_non_mapping_properties_raise(self):
        with pytest.raises(InvalidUserPropertiesError):
            normalize_properties("K", "nope")  # type: ignore[arg-type]


class TestWithPrivateEmail:
    """Test email injection used by signup."""

    def test_overwrites_caller_email(self):
        properties = {"public": {"name": "A"}, "private": {"email": "old@x.com", "phone": "1"}}

        result = with_private_email(properties, "a@x.com")

        assert result["private"] == {"email": "a@x.com", "phone": "1"}
        assert result["public"] == {"name": "A"}
        assert properties["private"]["email"] == "old@x.com"

    def test_creates_private_partition(self):
        assert with_private_email(None, "a@x.com") == {"private": {"email": "a@x.com"}}
