import pytest

from wayfinder.access.policy import (
    FIELD_TIERS,
    compute_visible_fields,
    evaluate_access,
    hidden_field_names,
    is_visible,
    min_tier_for,
)
from wayfinder.models.access import AccessTier
from wayfinder.models.person import PersonExtended


def make_subject(**overrides):
    values = dict(
        id="sam-reed",
        web_id="http://localhost:3002/sam-reed/profile/card#me",
        name="Sam Reed",
        role="Developer",
        department_id="dcs",
        team_id="puffin-delivery",
        skills=["Python", "FastAPI"],
        maintains=["citizen-portal"],
        email="a@b.gov",
        chat_handle="@sam-reed",
        office_hours="Fri 2-3pm",
        calendar="https://calendar.gov.uk/sam-reed",
        current_focus="Eligibility API",
        availability="Async preferred",
        mobile="07700900123",
        home_working_days="Mon, Tue",
        escalation_notes="P1 only",
    )
    values.update(overrides)
    return PersonExtended(**values)


def test_declared_tiers_match_disclosure_table():
    assert FIELD_TIERS["name"] is AccessTier.PUBLIC
    assert FIELD_TIERS["role"] is AccessTier.PUBLIC
    assert FIELD_TIERS["skills"] is AccessTier.PUBLIC
    assert FIELD_TIERS["email"] is AccessTier.GOVERNMENT
    assert FIELD_TIERS["chat_handle"] is AccessTier.GOVERNMENT
    assert FIELD_TIERS["office_hours"] is AccessTier.GOVERNMENT
    assert FIELD_TIERS["calendar"] is AccessTier.SAME_DEPARTMENT
    assert FIELD_TIERS["current_focus"] is AccessTier.SAME_DEPARTMENT
    assert FIELD_TIERS["availability"] is AccessTier.SAME_DEPARTMENT
    assert FIELD_TIERS["mobile"] is AccessTier.SAME_TEAM
    assert FIELD_TIERS["home_working_days"] is AccessTier.SAME_TEAM
    assert FIELD_TIERS["escalation_notes"] is AccessTier.SAME_TEAM


def test_tiers_are_totally_ordered():
    assert AccessTier.PUBLIC < AccessTier.GOVERNMENT < AccessTier.SAME_DEPARTMENT
    assert AccessTier.SAME_DEPARTMENT < AccessTier.SAME_TEAM < AccessTier.SELF


@pytest.mark.parametrize("tier", list(AccessTier))
def test_field_visible_iff_tier_at_or_above_minimum(tier):
    subject = make_subject()
    view = compute_visible_fields(tier, subject)
    for field, minimum in FIELD_TIERS.items():
        if getattr(subject, field) is None:
            continue
        assert (field in view) == (minimum <= tier), field


def test_undeclared_field_fails_closed():
    subject = make_subject(pager_number="0800 000 000")

    assert min_tier_for("pager_number") is AccessTier.SAME_TEAM
    for tier in (AccessTier.PUBLIC, AccessTier.GOVERNMENT, AccessTier.SAME_DEPARTMENT):
        assert "pager_number" not in compute_visible_fields(tier, subject)
        assert "pager_number" in hidden_field_names(tier, subject)
    assert compute_visible_fields(AccessTier.SAME_TEAM, subject)["pager_number"] == "0800 000 000"
    assert compute_visible_fields(AccessTier.SELF, subject)["pager_number"] == "0800 000 000"


def test_public_viewer_sees_name_role_skills_only_of_extended_fields():
    view = compute_visible_fields(AccessTier.PUBLIC, make_subject())

    assert view["name"] == "Sam Reed"
    assert view["role"] == "Developer"
    assert view["skills"] == ["Python", "FastAPI"]
    assert "email" not in view
    assert "mobile" not in view
    assert not any(field in view for field, tier in FIELD_TIERS.items() if tier > AccessTier.PUBLIC)


def test_same_team_viewer_sees_every_declared_field():
    subject = make_subject()
    view = compute_visible_fields(AccessTier.SAME_TEAM, subject)

    assert view["mobile"] == "07700900123"
    assert view["email"] == "a@b.gov"
    for field in FIELD_TIERS:
        if getattr(subject, field) is not None:
            assert field in view


def test_redacted_fields_are_absent_not_null():
    view = compute_visible_fields(AccessTier.GOVERNMENT, make_subject(photo=None))

    assert "calendar" not in view.to_dict()
    assert "photo" not in view.to_dict()
    assert None not in view.to_dict().values()


def test_redaction_is_deterministic():
    subject = make_subject()
    assert compute_visible_fields(AccessTier.GOVERNMENT, subject) == compute_visible_fields(
        AccessTier.GOVERNMENT, subject
    )


def test_is_visible_for_self_covers_everything():
    assert all(is_visible(field, AccessTier.SELF) for field in FIELD_TIERS)
    assert is_visible("anything-new", AccessTier.SELF)


def test_evaluate_access_partitions_fields():
    evaluation = evaluate_access(AccessTier.SAME_DEPARTMENT, "Same department (dcs)")

    assert evaluation.level == "same-department"
    assert evaluation.label == "Same Department"
    assert "calendar" in evaluation.visible_fields
    assert set(evaluation.hidden_fields) == {"mobile", "home_working_days", "escalation_notes"}
    assert set(evaluation.visible_fields).isdisjoint(evaluation.hidden_fields)


def test_tier_slug_round_trip_rejects_unknown():
    assert AccessTier.from_slug("same-team") is AccessTier.SAME_TEAM
    with pytest.raises(ValueError):
        AccessTier.from_slug("authenticated")
