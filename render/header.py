"""
Fixed document preamble and trailing evidence blocks.

These parts do not depend on the questionnaire workbook: versioning,
document identifiers, issue date/time, procedure code, the party blocks and
the procurement project.  The Response additionally names the economic
operator, the procurement project lot, and one ``cac:Evidence`` per evidence
identifier collected while rendering the answers.
"""

from __future__ import annotations

import datetime
import uuid
from typing import Iterable, Optional

from lxml import etree

from render.constants import (
    CONTRACT_FOLDER_ID,
    COUNTRY_LIST_ATTRS,
    DOCUMENT_AGENCY_ID,
    EO_ROLE_LIST_ATTRS,
    LOT_ID,
    PROCEDURE_CODE,
    SCHEME_VERSION_ID,
    SERVICE_AGENCY_ID,
    UBL_VERSION_ID,
)
from render.xml import comment, sub


def add_preamble(
    root: etree._Element,
    *,
    is_response: bool,
    issued_at: Optional[datetime.datetime] = None,
) -> None:
    issued_at = issued_at or datetime.datetime.now().astimezone()
    id_prefix = "ESPDRESP" if is_response else "ESPDREQ"

    comment(root, f" The ESPD-EDM-V{SCHEME_VERSION_ID} is entirely based on OASIS UBL-{UBL_VERSION_ID} ")
    sub(root, "cbc:UBLVersionID", UBL_VERSION_ID, {"schemeAgencyID": "OASIS-UBL-TC"})
    comment(root, f" How ESPD-EDM-V{SCHEME_VERSION_ID} uses the UBL-{UBL_VERSION_ID} schemas whilst keeping conformance ")
    sub(
        root,
        "cbc:ProfileExecutionID",
        f"ESPD-EDMv{SCHEME_VERSION_ID}",
        {"schemeAgencyID": "OP", "schemeVersionID": SCHEME_VERSION_ID},
    )
    comment(root, " The identifier of this document is generally generated by the systems that creates the ESPD ")
    sub(root, "cbc:ID", f"{id_prefix}-{DOCUMENT_AGENCY_ID}-{uuid.uuid4()}", {"schemeAgencyID": DOCUMENT_AGENCY_ID})
    comment(root, " Indicates whether this document is an original or a copy. In this case the document is the original ")
    sub(root, "cbc:CopyIndicator", "false")
    comment(root, " The unique identifier for this instance of the document. Copies of this document should have different UUIDs ")
    sub(
        root,
        "cbc:UUID",
        str(uuid.uuid4()),
        {
            "schemeID": "ISO/IEC 9834-8:2008 - 4UUID",
            "schemeAgencyID": SERVICE_AGENCY_ID,
            "schemeVersionID": SCHEME_VERSION_ID,
        },
    )
    comment(root, " The reference number the contracting authority assigns to this procurement procedure ")
    sub(root, "cbc:ContractFolderID", CONTRACT_FOLDER_ID, {"schemeAgencyID": DOCUMENT_AGENCY_ID})
    sub(root, "cbc:IssueDate", issued_at.date().isoformat())
    sub(root, "cbc:IssueTime", issued_at.timetz().isoformat(timespec="seconds"))
    comment(root, " The version of the content of this document. If the document is modified the element cbc:PreviousVersionID should be instantiated ")
    sub(
        root,
        "cbc:VersionID",
        SCHEME_VERSION_ID,
        {"schemeAgencyID": "OP", "schemeVersionID": SCHEME_VERSION_ID},
    )
    comment(root, " The type of the procurement procedure; this information is provided by eForms and the concrete notice per procedure ")
    sub(
        root,
        "cbc:ProcedureCode",
        PROCEDURE_CODE,
        {
            "listID": "Dummy_procurement-procedure-type",
            "listAgencyID": "OP",
            "listVersionID": "yyyymmdd-0",
        },
    )

    _contracting_party(root)
    if is_response:
        _economic_operator_party(root)
    _procurement_project(root, with_lot=is_response)


def _contracting_party(root: etree._Element) -> None:
    contracting = sub(root, "cac:ContractingParty")
    sub(contracting, "cbc:BuyerProfileURI", "DV")
    party = sub(contracting, "cac:Party")
    sub(party, "cbc:WebsiteURI", "DV")
    sub(party, "cbc:EndpointID", "DV", {"schemeID": "DV", "schemeAgencyID": "OP"})
    identification = sub(party, "cac:PartyIdentification")
    sub(identification, "cbc:ID", "B82387770", {"schemeAgencyID": "VIES"})
    sub(sub(party, "cac:PartyName"), "cbc:Name", "DV")

    address = sub(party, "cac:PostalAddress")
    sub(address, "cbc:StreetName", "DV")
    sub(address, "cbc:CityName", "DV")
    sub(address, "cbc:PostalZone", "DV")
    country_attrs = {k: v for k, v in COUNTRY_LIST_ATTRS.items() if k != "listName"}
    sub(sub(address, "cac:Country"), "cbc:IdentificationCode", "BEL", country_attrs)

    contact = sub(party, "cac:Contact")
    sub(contact, "cbc:Name", "DV")
    sub(contact, "cbc:Telephone", "DV")
    sub(contact, "cbc:ElectronicMail", "DV")


def _economic_operator_party(root: etree._Element) -> None:
    operator = sub(root, "cac:EconomicOperatorParty")
    sub(sub(operator, "cac:EconomicOperatorRole"), "cbc:RoleCode", "group-mem", EO_ROLE_LIST_ATTRS)

    party = sub(operator, "cac:Party")
    sub(party, "cbc:WebsiteURI", "https://www.ProcurerWebsite.eu")
    sub(
        party,
        "cbc:IndustryClassificationCode",
        "sme",
        {
            "listID": "http://publications.europa.eu/resource/authority/economic-operator-size",
            "listAgencyID": "OP",
            "listVersionID": "20220316-0",
        },
    )
    sub(sub(party, "cac:PartyIdentification"), "cbc:ID", "AD123456789", {"schemeAgencyID": "OP"})
    sub(sub(party, "cac:PartyName"), "cbc:Name", "__Procurer Official Name__")

    address = sub(party, "cac:PostalAddress")
    sub(address, "cbc:StreetName", "__ProcurerStreet__")
    sub(address, "cbc:CityName", "__ProcurerCity__")
    sub(address, "cbc:PostalZone", "12345")
    sub(sub(address, "cac:Country"), "cbc:IdentificationCode", "BEL", COUNTRY_LIST_ATTRS)

    contact = sub(party, "cac:Contact")
    sub(contact, "cbc:Name", "__ProcurerContactName__")
    sub(contact, "cbc:Telephone", "654321")
    sub(contact, "cbc:Telefax", "098765")
    sub(contact, "cbc:ElectronicMail", "__ProcurerContact@gov.eu")


def _procurement_project(root: etree._Element, *, with_lot: bool) -> None:
    sub(sub(root, "cac:ProcurementProject"), "cbc:Description", "Description of Project.")
    if with_lot:
        lot = sub(root, "cac:ProcurementProjectLot")
        sub(
            lot,
            "cbc:ID",
            LOT_ID,
            {"schemeID": "Criterion", "schemeAgencyID": "OP", "schemeVersionID": SCHEME_VERSION_ID},
        )


def add_evidence(root: etree._Element, evidence_ids: Iterable[str]) -> int:
    """Append one ``cac:Evidence`` block per identifier; return the count."""
    count = 0
    for evidence_id in evidence_ids:
        evidence = sub(root, "cac:Evidence")
        sub(evidence, "cbc:ID", evidence_id, {"schemeAgencyID": "XXXAGENCYXXX"})
        sub(
            evidence,
            "cbc:ConfidentialityLevelCode",
            "CONFIDENTIAL",
            {
                "listID": "http://publications.europa.eu/resource/authority/access-right",
                "listAgencyID": "OP",
                "listVersionID": "20220316-0",
            },
        )
        reference = sub(evidence, "cac:DocumentReference")
        sub(reference, "cbc:ID", "SAT-11121233", {"schemeAgencyID": "XXXAGENCYXXX"})
        attachment = sub(reference, "cac:Attachment")
        sub(sub(attachment, "cac:ExternalReference"), "cbc:URI", "http:dod.gov.usa/sat/it/soft/prk?id=11121233")
        issuer = sub(reference, "cac:IssuerParty")
        sub(sub(issuer, "cac:PartyIdentification"), "cbc:ID", "XXXXXXXX", {"schemeAgencyID": "XXXAGENCYXXX"})
        sub(sub(issuer, "cac:PartyName"), "cbc:Name", "USA DoD")
        count += 1
    return count
