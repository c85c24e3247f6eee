"""Tests for Attribute, Category, Request and RequestBuilder."""

import json

import pytest
from pydantic import ValidationError

from xacml_pep.constants import CATEGORY_ACCESS_SUBJECT, CATEGORY_RESOURCE
from xacml_pep.model import Attribute, Category, Request, RequestBuilder

# ============================================================================
# Attribute
# ============================================================================


class TestAttribute:
    """Tests for Attribute validation and wire names."""

    def test_wire_names(self) -> None:
        """Attributes serialize with JSON Profile member names."""
        # Arrange
        attribute = Attribute(attribute_id="role", value="user", include_in_result=True)

        # Act
        wire = attribute.to_wire()

        # Assert
        assert wire == {"AttributeId": "role", "Value": "user", "IncludeInResult": True}

    def test_accepts_alias_names(self) -> None:
        """Attributes decode from JSON Profile member names."""
        attribute = Attribute.model_validate({"AttributeId": "level", "Value": 3, "DataType": "integer"})

        assert attribute.attribute_id == "level"
        assert attribute.value == 3
        assert attribute.data_type == "integer"

    @pytest.mark.parametrize(
        "value",
        ["user", True, 42, 1.5, ["a", "b"], {"XPathCategory": CATEGORY_RESOURCE, "XPath": "//record/id"}],
    )
    def test_value_types(self, value: object) -> None:
        """Strings, booleans, numbers, bags and structured objects are accepted."""
        attribute = Attribute(attribute_id="x", value=value)

        assert attribute.value == value

    def test_empty_id_rejected(self) -> None:
        """AttributeId must not be empty."""
        with pytest.raises(ValidationError):
            Attribute(attribute_id="", value="user")

    @pytest.mark.parametrize("value", ["", [], {}])
    def test_empty_value_rejected(self, value: object) -> None:
        """Empty strings, bags and objects are rejected."""
        with pytest.raises(ValidationError, match="must not be empty"):
            Attribute(attribute_id="role", value=value)

    def test_frozen(self) -> None:
        """Attributes are immutable."""
        attribute = Attribute(attribute_id="role", value="user")

        with pytest.raises(ValidationError):
            attribute.value = "admin"


# ============================================================================
# Category
# ============================================================================


class TestCategory:
    """Tests for Category helpers."""

    def test_add_chains(self) -> None:
        """add() returns the category so calls can be chained."""
        category = Category().add("role", "user").add("iub", "123")

        assert [a.attribute_id for a in category.attributes] == ["role", "iub"]

    def test_get_values(self) -> None:
        """get_values() returns every value for an attribute id in order."""
        category = Category().add("role", "user").add("role", "auditor").add("iub", "123")

        assert category.get_values("role") == ["user", "auditor"]
        assert category.get_values("missing") == []

    def test_single_attribute_object_decoded(self) -> None:
        """A lone Attribute object decodes as a one-element sequence."""
        category = Category.model_validate({"Attribute": {"AttributeId": "role", "Value": "user"}})

        assert len(category.attributes) == 1
        assert category.attributes[0].value == "user"

    def test_attributes_always_encoded_as_array(self) -> None:
        """Encoding always writes the Attribute member as an array."""
        category = Category.model_validate({"Attribute": {"AttributeId": "role", "Value": "user"}})

        assert category.to_wire() == {"Attribute": [{"AttributeId": "role", "Value": "user"}]}


# ============================================================================
# Multi-decision predicate
# ============================================================================


class TestMultiDecisionPredicate:
    """Tests for Request.is_multi_decision_profile_request."""

    def test_one_category_per_type_is_single(self, single_request: Request) -> None:
        """One instance of each category type is a single-decision request."""
        assert single_request.is_multi_decision_profile_request is False

    def test_repeated_resource_is_multi(self, multi_request: Request) -> None:
        """Two resource categories make a multi-decision request."""
        assert multi_request.is_multi_decision_profile_request is True

    def test_empty_request_is_single(self) -> None:
        """A request with no categories is not a multi-decision request."""
        assert Request().is_multi_decision_profile_request is False

    def test_multi_requests_is_multi(self) -> None:
        """MultiRequests alone makes a multi-decision request."""
        request = (
            RequestBuilder()
            .add_access_subject_category(Category(id="s1").add("role", "user"))
            .add_resource_category(Category(id="r1").add("objectId", "sbie"))
            .multi_requests(["s1", "r1"])
            .build()
        )

        assert request.is_multi_decision_profile_request is True
        assert request.multi_requests is not None
        assert request.multi_requests.request_reference[0].reference_id == ("s1", "r1")

    def test_generic_category_counts_with_shorthand(self) -> None:
        """A generic access-subject category repeats the AccessSubject member."""
        request = (
            RequestBuilder()
            .add_access_subject_category(Category().add("role", "user"))
            .add_category(Category(category_id=CATEGORY_ACCESS_SUBJECT).add("role", "admin"))
            .build()
        )

        assert request.category_counts()[CATEGORY_ACCESS_SUBJECT] == 2
        assert request.is_multi_decision_profile_request is True

    def test_generic_category_shorthand_name_counts_as_urn(self) -> None:
        """Generic categories using a shorthand CategoryId count under the URN."""
        request = (
            RequestBuilder()
            .add_resource_category(Category().add("objectId", "sbie"))
            .add_category(Category(category_id="Resource").add("objectId", "ledger"))
            .build()
        )

        assert request.category_counts()[CATEGORY_RESOURCE] == 2
        assert request.is_multi_decision_profile_request is True

    def test_distinct_generic_categories_are_single(self) -> None:
        """Distinct custom categories do not make a multi-decision request."""
        request = (
            RequestBuilder()
            .add_category(Category(category_id="urn:example:category:device").add("os", "linux"))
            .add_category(Category(category_id="urn:example:category:network").add("zone", "dmz"))
            .build()
        )

        assert request.is_multi_decision_profile_request is False


# ============================================================================
# RequestBuilder
# ============================================================================


class TestRequestBuilder:
    """Tests for the fluent builder."""

    def test_flags(self) -> None:
        """Evaluation flags are carried into the request."""
        request = RequestBuilder().return_policy_id_list().combined_decision().xpath_version("2.0").build()

        assert request.return_policy_id_list is True
        assert request.combined_decision is True
        assert request.xpath_version == "2.0"

    def test_flags_can_be_switched_off(self) -> None:
        """return_policy_id_list(False) clears the flag."""
        request = RequestBuilder().return_policy_id_list().return_policy_id_list(False).build()

        assert request.return_policy_id_list is False

    def test_generic_category_requires_id(self) -> None:
        """add_category() rejects categories without a CategoryId."""
        with pytest.raises(ValueError, match="category_id"):
            RequestBuilder().add_category(Category().add("role", "user"))

    def test_build_snapshots_categories(self) -> None:
        """Changing a category after build() does not change the request."""
        # Arrange
        subject = Category().add("role", "user")
        builder = RequestBuilder().add_access_subject_category(subject)

        # Act
        request = builder.build()
        subject.add("role", "admin")

        # Assert
        assert request.access_subject[0].get_values("role") == ["user"]

    def test_request_is_frozen(self, single_request: Request) -> None:
        """Request fields cannot be reassigned after build()."""
        with pytest.raises(ValidationError):
            single_request.return_policy_id_list = True

    def test_builder_is_reusable(self) -> None:
        """Building twice yields independent, equal requests."""
        builder = RequestBuilder().add_resource_category(Category().add("objectId", "sbie"))

        first = builder.build()
        second = builder.build()

        assert first == second
        assert first.resource[0] is not second.resource[0]


# ============================================================================
# Request validation and serialization
# ============================================================================


class TestRequestSerialization:
    """Tests for the Request envelope encoding and decoding."""

    def test_generic_category_without_id_rejected(self) -> None:
        """Request validation rejects generic categories without CategoryId."""
        with pytest.raises(ValidationError, match="CategoryId"):
            Request(category=(Category().add("role", "user"),))

    def test_payload_shape(self) -> None:
        """The payload wraps the request in a Request member using wire names."""
        # Arrange
        request = (
            RequestBuilder()
            .add_access_subject_category(Category().add("Attributes.access_subject.iub", "123"))
            .add_resource_category(Category().add("bnc.object.objectId", "sbie"))
            .add_action_category(Category().add("bnc.action.actionId", "access"))
            .return_policy_id_list()
            .build()
        )

        # Act
        payload = request.to_payload()

        # Assert
        assert payload == {
            "Request": {
                "AccessSubject": [{"Attribute": [{"AttributeId": "Attributes.access_subject.iub", "Value": "123"}]}],
                "Action": [{"Attribute": [{"AttributeId": "bnc.action.actionId", "Value": "access"}]}],
                "Resource": [{"Attribute": [{"AttributeId": "bnc.object.objectId", "Value": "sbie"}]}],
                "ReturnPolicyIdList": True,
                "CombinedDecision": False,
            }
        }

    def test_empty_category_members_omitted(self) -> None:
        """Category members with no entries are left out of the payload."""
        payload = Request().to_payload()

        assert payload == {"Request": {"ReturnPolicyIdList": False, "CombinedDecision": False}}

    def test_json_round_trip(self, multi_request: Request) -> None:
        """Decoding to_json() output yields an equal request."""
        decoded = Request.from_json(multi_request.to_json())

        assert decoded == multi_request
        assert decoded.is_multi_decision_profile_request is True

    def test_to_json_indent(self, single_request: Request) -> None:
        """to_json(indent=2) produces pretty-printed, parseable JSON."""
        text = single_request.to_json(indent=2)

        assert "\n  " in text
        assert json.loads(text) == single_request.to_payload()

    def test_decodes_json_profile_1_0_objects(self) -> None:
        """Single objects in place of arrays decode as one-element sequences."""
        payload = {
            "Request": {
                "AccessSubject": {"Attribute": {"AttributeId": "role", "Value": "user"}},
                "Resource": {"Attribute": [{"AttributeId": "objectId", "Value": "sbie"}]},
            }
        }

        request = Request.from_payload(payload)

        assert len(request.access_subject) == 1
        assert request.access_subject[0].get_values("role") == ["user"]
        assert request.resource[0].get_values("objectId") == ["sbie"]

    def test_decodes_multi_requests(self) -> None:
        """MultiRequests decodes from its wire form."""
        payload = {
            "Request": {
                "AccessSubject": {"Id": "s1", "Attribute": {"AttributeId": "role", "Value": "user"}},
                "MultiRequests": {"RequestReference": {"ReferenceId": "s1"}},
            }
        }

        request = Request.from_payload(payload)

        assert request.multi_requests is not None
        assert request.multi_requests.request_reference[0].reference_id == ("s1",)
        assert request.is_multi_decision_profile_request is True

    @pytest.mark.parametrize("payload", [{}, {"AccessSubject": []}, [], "Request"])
    def test_missing_envelope_rejected(self, payload: object) -> None:
        """from_payload() requires the Request member."""
        with pytest.raises(ValueError, match="'Request' member"):
            Request.from_payload(payload)
