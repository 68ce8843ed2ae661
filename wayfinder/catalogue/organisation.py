"""Fictional departments and teams used to place people in the organisation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional


@dataclass(frozen=True)
class Department:
    id: str
    name: str
    acronym: str
    domain: str
    teams: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class Team:
    id: str
    name: str
    department_id: str


DEPARTMENTS: List[Department] = [
    Department(
        id="dso",
        name="Digital Standards Office",
        acronym="DSO",
        domain="standards.demo.gov.example",
        teams=["granite-platform", "cedar-design", "birch-notify", "willow-pay"],
    ),
    Department(
        id="dcs",
        name="Department for Citizen Support",
        acronym="DCS",
        domain="citizen-support.demo.gov.example",
        teams=["puffin-delivery", "cormorant-data", "gannet-platform", "tern-integration"],
    ),
    Department(
        id="rts",
        name="Revenue & Taxation Service",
        acronym="RTS",
        domain="revenue.demo.gov.example",
        teams=["falcon-core", "kestrel-api", "merlin-data", "osprey-compliance"],
    ),
    Department(
        id="bia",
        name="Border & Identity Agency",
        acronym="BIA",
        domain="identity.demo.gov.example",
        teams=["wolf-identity", "bear-border", "lynx-documents", "fox-biometrics"],
    ),
    Department(
        id="vla",
        name="Vehicle & Licensing Authority",
        acronym="VLA",
        domain="vehicles.demo.gov.example",
        teams=["badger-registry", "otter-licensing", "hare-enquiries"],
    ),
    Department(
        id="nhds",
        name="National Health Data Service",
        acronym="NHDS",
        domain="health-data.demo.gov.example",
        teams=["oak-records", "elm-prescriptions", "ash-integration", "maple-analytics"],
    ),
]

TEAMS: List[Team] = [
    Team("granite-platform", "Granite Platform Team", "dso"),
    Team("cedar-design", "Cedar Design System", "dso"),
    Team("birch-notify", "Birch Notifications", "dso"),
    Team("willow-pay", "Willow Payments", "dso"),
    Team("puffin-delivery", "Puffin Delivery Squad", "dcs"),
    Team("cormorant-data", "Cormorant Data Team", "dcs"),
    Team("gannet-platform", "Gannet Platform Engineering", "dcs"),
    Team("tern-integration", "Tern Integration Hub", "dcs"),
    Team("falcon-core", "Falcon Core Systems", "rts"),
    Team("kestrel-api", "Kestrel API Team", "rts"),
    Team("merlin-data", "Merlin Data Platform", "rts"),
    Team("osprey-compliance", "Osprey Compliance", "rts"),
    Team("wolf-identity", "Wolf Identity Platform", "bia"),
    Team("bear-border", "Bear Border Systems", "bia"),
    Team("lynx-documents", "Lynx Document Services", "bia"),
    Team("fox-biometrics", "Fox Biometrics Unit", "bia"),
    Team("badger-registry", "Badger Vehicle Registry", "vla"),
    Team("otter-licensing", "Otter Licensing Team", "vla"),
    Team("hare-enquiries", "Hare Enquiries Service", "vla"),
    Team("oak-records", "Oak Health Records", "nhds"),
    Team("elm-prescriptions", "Elm Prescriptions Platform", "nhds"),
    Team("ash-integration", "Ash Integration Services", "nhds"),
    Team("maple-analytics", "Maple Health Analytics", "nhds"),
]

_DEPARTMENTS_BY_ID: Dict[str, Department] = {department.id: department for department in DEPARTMENTS}
_TEAMS_BY_ID: Dict[str, Team] = {team.id: team for team in TEAMS}


def get_department(department_id: str) -> Optional[Department]:
    return _DEPARTMENTS_BY_ID.get(department_id)


def get_team(team_id: str) -> Optional[Team]:
    return _TEAMS_BY_ID.get(team_id)
