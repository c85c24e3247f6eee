"""Tests for response models: Decision, Result, Response, SingleResponse."""

import pytest
from pydantic import ValidationError

from xacml_pep.model import Decision, Response, Result, SingleResponse

# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def detailed_result_body() -> dict:
    """A Result using every modeled member."""
    return {
        "Decision": "Deny",
        "Status": {
            "StatusCode": {
                "Value": "urn:oasis:names:tc:xacml:1.0:status:ok",
                "StatusCode": {"Value": "urn:example:status:detail"},
            },
            "StatusMessage": "denied by policy",
        },
        "Obligations": [
            {
                "Id": "urn:example:obligation:log",
                "AttributeAssignment": [{"AttributeId": "reason", "Value": "after-hours"}],
            }
        ],
        "AssociatedAdvice": {"Id": "urn:example:advice:retry"},
        "PolicyIdentifierList": {
            "PolicyIdReference": [{"Id": "policy-1", "Version": "1.0"}],
            "PolicySetIdReference": {"Id": "root-set"},
        },
    }


# ============================================================================
# Result
# ============================================================================


class TestResult:
    """Tests for Result decoding."""

    @pytest.mark.parametrize(
        "wire, decision",
        [
            ("Permit", Decision.PERMIT),
            ("Deny", Decision.DENY),
            ("NotApplicable", Decision.NOT_APPLICABLE),
            ("Indeterminate", Decision.INDETERMINATE),
        ],
    )
    def test_decisions(self, wire: str, decision: Decision) -> None:
        """All four XACML decisions decode."""
        assert Result.model_validate({"Decision": wire}).decision is decision

    def test_unknown_decision_rejected(self) -> None:
        """Decisions outside the XACML set are rejected."""
        with pytest.raises(ValidationError):
            Result.model_validate({"Decision": "Maybe"})

    def test_missing_decision_rejected(self) -> None:
        """Decision is required."""
        with pytest.raises(ValidationError):
            Result.model_validate({"Status": {"StatusMessage": "no decision"}})

    def test_is_permit(self) -> None:
        """is_permit is true only for Permit."""
        assert Result(decision=Decision.PERMIT).is_permit is True
        assert Result(decision=Decision.DENY).is_permit is False

    def test_detailed_members(self, detailed_result_body: dict) -> None:
        """Status, obligations, advice and policy ids decode."""
        result = Result.model_validate(detailed_result_body)

        assert result.status is not None
        assert result.status.status_message == "denied by policy"
        assert result.status.status_code is not None
        assert result.status.status_code.status_code is not None
        assert result.status.status_code.status_code.value == "urn:example:status:detail"
        assert result.obligations is not None
        assert result.obligations[0].attribute_assignment[0].value == "after-hours"
        assert result.associated_advice is not None
        assert result.associated_advice[0].id == "urn:example:advice:retry"
        assert result.policy_identifier_list is not None
        assert result.policy_identifier_list.policy_id_reference[0].version == "1.0"
        assert result.policy_identifier_list.policy_set_id_reference[0].id == "root-set"

    def test_unknown_members_preserved(self) -> None:
        """Members the client does not model survive re-encoding."""
        result = Result.model_validate({"Decision": "Permit", "urn:example:extension": {"ttl": 60}})

        assert result.model_extra == {"urn:example:extension": {"ttl": 60}}
        assert result.to_wire() == {"Decision": "Permit", "urn:example:extension": {"ttl": 60}}

    def test_structured_assignment_value(self) -> None:
        """An obligation may assign an XPathExpression object, kept as-is on re-encoding."""
        xpath = {
            "XPathCategory": "urn:oasis:names:tc:xacml:3.0:attribute-category:resource",
            "XPath": "//record/patient/id",
        }
        body = {
            "Decision": "Permit",
            "Obligations": [
                {
                    "Id": "urn:example:obligation:redact",
                    "AttributeAssignment": {
                        "AttributeId": "field",
                        "Value": xpath,
                        "DataType": "xpathExpression",
                    },
                }
            ],
        }

        result = Result.model_validate(body)

        assert result.obligations is not None
        assert result.obligations[0].attribute_assignment[0].value == xpath
        assert result.to_wire()["Obligations"][0]["AttributeAssignment"][0]["Value"] == xpath

    def test_encoding_uses_arrays(self, detailed_result_body: dict) -> None:
        """Members sent as single objects are re-encoded as arrays."""
        wire = Result.model_validate(detailed_result_body).to_wire()

        assert wire["AssociatedAdvice"] == [{"Id": "urn:example:advice:retry", "AttributeAssignment": []}]
        assert wire["PolicyIdentifierList"]["PolicySetIdReference"] == [{"Id": "root-set"}]


# ============================================================================
# Response / SingleResponse
# ============================================================================


class TestResponse:
    """Tests for the canonical multi-result Response."""

    def test_decodes_array(self) -> None:
        """The 1.1 array shape decodes with results in order."""
        response = Response.model_validate({"Response": [{"Decision": "Permit"}, {"Decision": "Deny"}]})

        assert response.decisions == [Decision.PERMIT, Decision.DENY]
        assert response.first.decision is Decision.PERMIT

    def test_rejects_object(self) -> None:
        """A single result object is not the canonical shape."""
        with pytest.raises(ValidationError):
            Response.model_validate({"Response": {"Decision": "Permit"}})

    def test_rejects_empty(self) -> None:
        """A Response holds at least one result."""
        with pytest.raises(ValidationError):
            Response.model_validate({"Response": []})

    def test_wire_shape(self) -> None:
        """Responses encode to the 1.1 array shape."""
        response = Response(results=[Result(decision=Decision.NOT_APPLICABLE)])

        assert response.to_wire() == {"Response": [{"Decision": "NotApplicable"}]}


class TestSingleResponse:
    """Tests for the 1.0 single-result shape."""

    def test_decodes_object(self) -> None:
        """The 1.0 object shape decodes."""
        single = SingleResponse.model_validate({"Response": {"Decision": "Deny"}})

        assert single.result.decision is Decision.DENY

    def test_decodes_one_element_array(self) -> None:
        """A one-element array is accepted as a single result."""
        single = SingleResponse.model_validate({"Response": [{"Decision": "Permit"}]})

        assert single.result.decision is Decision.PERMIT

    def test_rejects_longer_arrays(self) -> None:
        """Arrays with more than one result are not a single response."""
        with pytest.raises(ValidationError, match="exactly one result"):
            SingleResponse.model_validate({"Response": [{"Decision": "Permit"}, {"Decision": "Deny"}]})
