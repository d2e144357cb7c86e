import os

from typing import Dict

SCHEME_VERSION_ID: str = os.getenv("ESPD_SCHEME_VERSION", "4.0.0")
CONTRACT_FOLDER_ID: str = os.getenv("ESPD_CONTRACT_FOLDER_ID", "PP.20170419.1024-9")
PROCEDURE_CODE: str = os.getenv("ESPD_PROCEDURE_CODE", "Open")
LOT_ID: str = os.getenv("ESPD_LOT_ID", "LOT-0000")
SERVICE_AGENCY_ID: str = os.getenv("ESPD_SERVICE_AGENCY_ID", "XXXESPD-SERVICEXXX")
DOCUMENT_AGENCY_ID: str = os.getenv("ESPD_DOCUMENT_AGENCY_ID", "DGPE")

UBL_VERSION_ID = "2.3"

REQUEST_NS = "urn:oasis:names:specification:ubl:schema:xsd:QualificationApplicationRequest-2"
RESPONSE_NS = "urn:oasis:names:specification:ubl:schema:xsd:QualificationApplicationResponse-2"

NAMESPACES: Dict[str, str] = {
    "cac": "urn:oasis:names:specification:ubl:schema:xsd:CommonAggregateComponents-2",
    "cbc": "urn:oasis:names:specification:ubl:schema:xsd:CommonBasicComponents-2",
    "espd": f"urn:com:grow:espd:{SCHEME_VERSION_ID}",
    "fn": "http://www.w3.org/2005/xpath-functions",
    "xs": "http://www.w3.org/2001/XMLSchema",
    "xsi": "http://www.w3.org/2001/XMLSchema-instance",
}

# Extra prefixes declared on the request root only
REQUEST_EXTRA_NAMESPACES: Dict[str, str] = {
    "text": "urn:oasis:names:tc:opendocument:xmlns:text:1.0",
    "util": "java:java.util.UUID",
    "style": "urn:oasis:names:tc:opendocument:xmlns:style:1.0",
    "table": "urn:oasis:names:tc:opendocument:xmlns:table:1.0",
    "office": "urn:oasis:names:tc:opendocument:xmlns:office:1.0",
}

SCHEMA_LOCATIONS: Dict[str, str] = {
    REQUEST_NS: f"{REQUEST_NS} ../xsdrt/maindoc/UBL-QualificationApplicationRequest-2.3.xsd",
    RESPONSE_NS: f"{RESPONSE_NS} ../xsdrt/maindoc/UBL-QualificationApplicationResponse-2.3.xsd",
}

# Attribute sets that recur on many elements
CRITERION_ID_ATTRS: Dict[str, str] = {
    "schemeID": "Criterion",
    "schemeAgencyID": "OP",
    "schemeVersionID": SCHEME_VERSION_ID,
}
RESPONSE_ID_ATTRS: Dict[str, str] = {
    "schemeID": "Criterion",
    "schemeAgencyID": SERVICE_AGENCY_ID,
    "schemeVersionID": SCHEME_VERSION_ID,
}
COUNTRY_LIST_ATTRS: Dict[str, str] = {
    "listID": "http://publications.europa.eu/resource/authority/country",
    "listName": "country",
    "listAgencyID": "ISO",
    "listVersionID": "20220928-0",
}
EO_ROLE_LIST_ATTRS: Dict[str, str] = {
    "listID": "http://publications.europa.eu/resource/authority/eo-role-type",
    "listAgencyID": "OP",
    "listVersionID": "20211208-0",
}

# Code list name (lower-cased) -> ExpectedCode / ResponseCode attributes
CODE_LIST_ATTRS: Dict[str, Dict[str, str]] = {
    "occupation": {
        "listID": "http://publications.europa.eu/resource/authority/occupation",
        "listAgencyID": "EMPL",
        "listVersionID": "20221214-0",
    },
    "financialratiotype": {
        "listID": "financial-ratio-type",
        "listAgencyID": "OP",
        "listVersionID": SCHEME_VERSION_ID,
    },
    "eoroletype": EO_ROLE_LIST_ATTRS,
}
