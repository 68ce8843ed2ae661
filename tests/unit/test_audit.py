from wayfinder.access.audit import AccessAuditTrail
from wayfinder.models.access import AccessTier


def record(trail, subject_id="river-stone", **overrides):
    values = dict(
        viewer="hazel-brook",
        subject_id=subject_id,
        tier=AccessTier.SAME_TEAM,
        fields_revealed=["name", "mobile", "email"],
        fields_denied=[],
    )
    values.update(overrides)
    return trail.record(**values)


def test_entries_carry_verifiable_hash():
    trail = AccessAuditTrail(max_entries=10)
    entry = record(trail)

    assert entry.fields_revealed == ["email", "mobile", "name"]
    assert len(entry.integrity_hash) == 64
    assert trail.verify(entry)


def test_tampered_entry_fails_verification():
    trail = AccessAuditTrail(max_entries=10)
    entry = record(trail)

    tampered = entry.model_copy(update={"tier": AccessTier.SELF})

    assert not trail.verify(tampered)


def test_trail_is_bounded_and_newest_first():
    trail = AccessAuditTrail(max_entries=3)
    for index in range(5):
        record(trail, subject_id=f"person-{index}")

    assert len(trail) == 3
    assert [entry.subject_id for entry in trail.recent(10)] == ["person-4", "person-3", "person-2"]
    assert [entry.subject_id for entry in trail.recent(1)] == ["person-4"]


def test_public_viewer_is_recorded_without_identity():
    trail = AccessAuditTrail(max_entries=10)
    entry = record(trail, viewer=None, tier=AccessTier.PUBLIC, fields_denied=["mobile"])

    assert entry.viewer is None
    assert entry.tier is AccessTier.PUBLIC
    assert trail.verify(entry)
