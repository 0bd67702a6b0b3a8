from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class CompanyInfo(BaseModel):
    """Company summary from /v4/company. The API may omit any field."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    name: Optional[str] = None
    founder: Optional[str] = None
    founded: Optional[int] = None
    employees: Optional[int] = None
    # The live API spells this launch_sites; older payloads use launchSites
    launch_sites: Optional[int] = Field(
        default=None,
        validation_alias=AliasChoices("launchSites", "launch_sites"),
    )
    valuation: Optional[int] = None

    ceo: Optional[str] = None
    cto: Optional[str] = None
    coo: Optional[str] = None
    vehicles: Optional[int] = None
    test_sites: Optional[int] = None
    summary: Optional[str] = None
