"""Shared test doubles."""

from typing import List, Optional


class FakeClock:
    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def turtle_profile(
    *,
    name: Optional[str] = None,
    role: Optional[str] = None,
    email: Optional[str] = None,
    skills: Optional[List[str]] = None,
    photo: Optional[str] = None,
) -> str:
    statements = ["a foaf:Person"]
    if name:
        statements.append(f'foaf:name "{name}"')
    if role:
        statements.append(f'vcard:role "{role}"')
    if email:
        statements.append(f"vcard:hasEmail <mailto:{email}>")
    if skills:
        statements.append(f'vcard:note "{", ".join(skills)}"')
    if photo:
        statements.append(f"foaf:img <{photo}>")
    body = " ;\n    ".join(statements)
    return (
        "@prefix foaf: <http://xmlns.com/foaf/0.1/> .\n"
        "@prefix vcard: <http://www.w3.org/2006/vcard/ns#> .\n\n"
        f"<#me> {body} .\n"
    )
