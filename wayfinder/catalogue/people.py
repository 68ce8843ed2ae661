"""Locally-held fallback records for the demo people.

Core facts are public catalogue data. The extended fields stand in for what a
person would normally keep in their own pod and are only used when the pod
cannot be reached.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional

from wayfinder.catalogue.organisation import get_department, get_team
from wayfinder.core.config import settings
from wayfinder.models.person import PersonExtended

logger = logging.getLogger(__name__)

PEOPLE: List[Dict[str, Any]] = [
    # Digital Standards Office
    {
        "id": "flint-rivers",
        "name": "Flint Rivers",
        "department_id": "dso",
        "team_id": "granite-platform",
        "role": "Lead Platform Engineer",
        "skills": ["Kubernetes", "Terraform", "AWS", "Go", "Service Mesh"],
        "email": "flint.rivers@standards.demo.gov.example",
        "maintains": ["api-gateway", "service-mesh", "cloud-platform"],
    },
    {
        "id": "brook-alder",
        "name": "Brook Alder",
        "department_id": "dso",
        "team_id": "granite-platform",
        "role": "Senior SRE",
        "skills": ["Prometheus", "Grafana", "Kubernetes", "Python"],
        "email": "brook.alder@standards.demo.gov.example",
        "maintains": ["secrets-manager"],
    },
    {
        "id": "sage-thornton",
        "name": "Sage Thornton",
        "department_id": "dso",
        "team_id": "cedar-design",
        "role": "Principal Designer",
        "skills": ["Figma", "Accessibility", "Design Systems", "CSS", "React"],
        "email": "sage.thornton@standards.demo.gov.example",
        "maintains": ["design-system", "component-library"],
    },
    {
        "id": "rowan-marsh",
        "name": "Rowan Marsh",
        "department_id": "dso",
        "team_id": "birch-notify",
        "role": "Tech Lead",
        "skills": ["Node.js", "AWS SES", "Twilio", "PostgreSQL"],
        "email": "rowan.marsh@standards.demo.gov.example",
        "maintains": ["gov-notify", "template-service", "delivery-receipts"],
    },
    {
        "id": "ivy-banks",
        "name": "Ivy Banks",
        "department_id": "dso",
        "team_id": "willow-pay",
        "role": "Senior Developer",
        "skills": ["Java", "Spring Boot", "PCI-DSS", "PostgreSQL", "Stripe"],
        "email": "ivy.banks@standards.demo.gov.example",
        "maintains": ["gov-pay", "refund-service", "reconciliation-api"],
    },
    # Department for Citizen Support
    {
        "id": "river-stone",
        "name": "River Stone",
        "department_id": "dcs",
        "team_id": "puffin-delivery",
        "role": "Lead Developer",
        "skills": ["TypeScript", "React", "Node.js", "PostgreSQL", "GDS Patterns"],
        "email": "river.stone@citizen-support.demo.gov.example",
        "maintains": ["citizen-portal", "eligibility-api", "application-service"],
    },
    {
        "id": "hazel-brook",
        "name": "Hazel Brook",
        "department_id": "dcs",
        "team_id": "puffin-delivery",
        "role": "Senior Developer",
        "skills": ["TypeScript", "React", "Accessibility", "Jest"],
        "email": "hazel.brook@citizen-support.demo.gov.example",
        "maintains": ["citizen-portal", "case-management"],
    },
    {
        "id": "clay-fielding",
        "name": "Clay Fielding",
        "department_id": "dcs",
        "team_id": "cormorant-data",
        "role": "Data Engineer",
        "skills": ["Python", "Spark", "Airflow", "PostgreSQL", "dbt"],
        "email": "clay.fielding@citizen-support.demo.gov.example",
        "maintains": ["citizen-data-platform", "calculation-engine", "reporting-api"],
    },
    {
        "id": "fern-whitley",
        "name": "Fern Whitley",
        "department_id": "dcs",
        "team_id": "tern-integration",
        "role": "Integration Architect",
        "skills": ["API Design", "Event Streaming", "Kafka", "OAuth"],
        "email": "fern.whitley@citizen-support.demo.gov.example",
        "maintains": ["integration-hub", "data-exchange-api", "partner-gateway"],
    },
    # Revenue & Taxation Service
    {
        "id": "ash-morgan",
        "name": "Ash Morgan",
        "department_id": "rts",
        "team_id": "falcon-core",
        "role": "Principal Architect",
        "skills": ["Java", "Domain Modeling", "Tax Systems", "Event Sourcing"],
        "email": "ash.morgan@revenue.demo.gov.example",
        "maintains": ["tax-calculation-engine", "assessment-service"],
    },
    {
        "id": "reed-oakley",
        "name": "Reed Oakley",
        "department_id": "rts",
        "team_id": "kestrel-api",
        "role": "API Lead",
        "skills": ["REST", "OpenAPI", "OAuth", "Developer Experience"],
        "email": "reed.oakley@revenue.demo.gov.example",
        "maintains": ["income-verification-api", "employer-api", "rts-developer-portal"],
    },
    {
        "id": "storm-vale",
        "name": "Storm Vale",
        "department_id": "rts",
        "team_id": "merlin-data",
        "role": "Data Platform Lead",
        "skills": ["Spark", "Kafka", "AWS", "Data Governance", "Python"],
        "email": "storm.vale@revenue.demo.gov.example",
        "maintains": ["rts-data-lake", "rti-processor", "analytics-platform"],
    },
    {
        "id": "wren-hartley",
        "name": "Wren Hartley",
        "department_id": "rts",
        "team_id": "osprey-compliance",
        "role": "ML Engineer",
        "skills": ["Python", "TensorFlow", "Fraud Detection", "MLOps"],
        "email": "wren.hartley@revenue.demo.gov.example",
        "maintains": ["fraud-detection-api", "risk-scoring-service"],
    },
    # Border & Identity Agency
    {
        "id": "slate-wylder",
        "name": "Slate Wylder",
        "department_id": "bia",
        "team_id": "wolf-identity",
        "role": "Identity Architect",
        "skills": ["Identity Standards", "OAuth", "OIDC", "Biometrics"],
        "email": "slate.wylder@identity.demo.gov.example",
        "maintains": ["identity-verification-api", "document-check-service", "id-proofing-service"],
    },
    {
        "id": "gale-frost",
        "name": "Gale Frost",
        "department_id": "bia",
        "team_id": "bear-border",
        "role": "Senior Systems Engineer",
        "skills": ["High-availability", "Real-time Systems", "Security"],
        "email": "gale.frost@identity.demo.gov.example",
        "maintains": ["border-control-api", "watchlist-service", "egate-service"],
    },
    {
        "id": "laurel-finch",
        "name": "Laurel Finch",
        "department_id": "bia",
        "team_id": "lynx-documents",
        "role": "Tech Lead",
        "skills": ["Document Processing", "Workflow", "Node.js", "PostgreSQL"],
        "email": "laurel.finch@identity.demo.gov.example",
        "maintains": ["passport-application-api", "visa-status-api", "right-to-work-api"],
    },
    {
        "id": "cliff-ashford",
        "name": "Cliff Ashford",
        "department_id": "bia",
        "team_id": "fox-biometrics",
        "role": "Biometrics Lead",
        "skills": ["Biometric Matching", "Computer Vision", "Python", "C++"],
        "email": "cliff.ashford@identity.demo.gov.example",
        "maintains": ["biometric-matching-api", "facial-recognition-service", "biometric-enrolment"],
    },
    # Vehicle & Licensing Authority
    {
        "id": "moss-sterling",
        "name": "Moss Sterling",
        "department_id": "vla",
        "team_id": "badger-registry",
        "role": "Lead Developer",
        "skills": ["Java", "Spring", "Oracle", "Event Sourcing"],
        "email": "moss.sterling@vehicles.demo.gov.example",
        "maintains": ["vehicle-register-api", "keeper-records-api", "vehicle-history-service"],
    },
    {
        "id": "dale-heather",
        "name": "Dale Heather",
        "department_id": "vla",
        "team_id": "otter-licensing",
        "role": "Senior Developer",
        "skills": ["TypeScript", "React", "Node.js", "GDS Patterns"],
        "email": "dale.heather@vehicles.demo.gov.example",
        "maintains": ["licence-application-api", "entitlement-check-api"],
    },
    {
        "id": "pine-holloway",
        "name": "Pine Holloway",
        "department_id": "vla",
        "team_id": "hare-enquiries",
        "role": "API Platform Lead",
        "skills": ["High-volume APIs", "Caching", "Rate Limiting", "Go"],
        "email": "pine.holloway@vehicles.demo.gov.example",
        "maintains": ["vehicle-enquiry-api", "driver-lookup-api", "police-enquiry-api"],
    },
    # National Health Data Service
    {
        "id": "heath-willows",
        "name": "Heath Willows",
        "department_id": "nhds",
        "team_id": "oak-records",
        "role": "Clinical Systems Lead",
        "skills": ["FHIR", "HL7", "Health Informatics", "Java"],
        "email": "heath.willows@health-data.demo.gov.example",
        "maintains": ["summary-care-record-api", "health-info-exchange", "patient-demographics-api"],
    },
    {
        "id": "juniper-cole",
        "name": "Juniper Cole",
        "department_id": "nhds",
        "team_id": "elm-prescriptions",
        "role": "Senior Developer",
        "skills": ["FHIR", "Digital Signatures", "Node.js", "PostgreSQL"],
        "email": "juniper.cole@health-data.demo.gov.example",
        "maintains": ["electronic-prescription-api", "dispensing-service", "medication-record-api"],
    },
    {
        "id": "birch-tanner",
        "name": "Birch Tanner",
        "department_id": "nhds",
        "team_id": "ash-integration",
        "role": "Integration Architect",
        "skills": ["FHIR", "ITK3", "MESH", "Integration Patterns"],
        "email": "birch.tanner@health-data.demo.gov.example",
        "maintains": ["fhir-api-platform", "message-router", "integration-toolkit"],
    },
    {
        "id": "aspen-grey",
        "name": "Aspen Grey",
        "department_id": "nhds",
        "team_id": "maple-analytics",
        "role": "Data Privacy Lead",
        "skills": ["Anonymisation", "Differential Privacy", "Python", "Statistics"],
        "email": "aspen.grey@health-data.demo.gov.example",
        "maintains": ["anonymisation-service", "population-health-api", "research-data-api"],
    },
]

EXTENDED_DATA: Dict[str, Dict[str, Any]] = {
    "river-stone": {
        "chat_handle": "@river-stone",
        "office_hours": "Tue & Thu, 2-4pm",
        "calendar": "https://calendar.gov.uk/river-stone",
        "current_focus": "Eligibility API v3 migration, FHIR integration",
        "availability": "Generally available, prefer async",
        "mobile": "07700 900123",
        "home_working_days": "Mon, Wed, Fri",
        "escalation_notes": "Reach via Slack first. Mobile for P1 only.",
    },
    "ash-morgan": {
        "chat_handle": "@ash-morgan",
        "office_hours": "Mon & Wed, 10am-12pm",
        "calendar": "https://calendar.gov.uk/ash-morgan",
        "current_focus": "MTD API performance optimization",
        "availability": "Deep work mornings, meetings afternoons",
        "mobile": "07700 900456",
        "home_working_days": "Tue, Thu",
        "escalation_notes": "Tax calculation queries - check wiki first.",
    },
    "slate-wylder": {
        "chat_handle": "@slate-wylder",
        "office_hours": "Daily 3-4pm drop-in",
        "calendar": "https://calendar.gov.uk/slate-wylder",
        "current_focus": "Biometric API security hardening",
        "availability": "Security reviews priority",
        "mobile": "07700 900789",
        "home_working_days": "Mon, Fri",
        "escalation_notes": "Security incidents: call immediately.",
    },
    "flint-rivers": {
        "chat_handle": "@flint-rivers",
        "office_hours": "Thu 2-5pm architecture clinic",
        "calendar": "https://calendar.gov.uk/flint-rivers",
        "current_focus": "API Gateway v4 planning, mTLS rollout",
        "availability": "Cross-gov consultations welcome",
        "mobile": "07700 900321",
        "home_working_days": "Wed, Fri",
        "escalation_notes": "Gateway issues: #granite-platform-support first.",
    },
    "heath-willows": {
        "chat_handle": "@heath-willows",
        "office_hours": "Mon 2-4pm FHIR office hours",
        "calendar": "https://calendar.gov.uk/heath-willows",
        "current_focus": "NHS App integration, HL7 FHIR R4",
        "availability": "FHIR/health data queries welcome",
        "mobile": "07700 900654",
        "home_working_days": "Tue, Thu",
        "escalation_notes": "Patient data issues: follow NHDS incident process.",
    },
}


def web_id_for(person_id: str, pod_server: Optional[str] = None) -> str:
    base = (pod_server or settings.DEMO_POD_SERVER).rstrip("/")
    return f"{base}/{person_id}/profile/card#me"


class FallbackStore:
    """Read-only lookup over the locally-held person records."""

    def __init__(self, records: Iterable[PersonExtended]) -> None:
        self._by_id: Dict[str, PersonExtended] = {}
        self._by_web_id: Dict[str, PersonExtended] = {}
        for record in records:
            self._by_id[record.id] = record
            self._by_web_id[record.web_id] = record

    def get(self, person_id: str) -> Optional[PersonExtended]:
        return self._by_id.get(person_id)

    def get_by_web_id(self, web_id: str) -> Optional[PersonExtended]:
        return self._by_web_id.get(web_id)

    def all(self) -> List[PersonExtended]:
        return list(self._by_id.values())

    def __len__(self) -> int:
        return len(self._by_id)


def _check_placement(person: PersonExtended) -> None:
    team = get_team(person.team_id)
    if get_department(person.department_id) is None or team is None:
        raise ValueError(f"{person.id} is placed in an unknown department or team")
    if team.department_id != person.department_id:
        raise ValueError(f"{person.id}: team {team.id} does not belong to {person.department_id}")


def load_fallback_store(pod_server: Optional[str] = None) -> FallbackStore:
    """Build the fallback store from the bundled catalogue."""

    records = [
        PersonExtended(
            **person,
            **EXTENDED_DATA.get(person["id"], {}),
            web_id=web_id_for(person["id"], pod_server),
        )
        for person in PEOPLE
    ]
    for record in records:
        _check_placement(record)
    logger.info("Loaded %d fallback person records", len(records))
    return FallbackStore(records)


fallback_store = load_fallback_store()
