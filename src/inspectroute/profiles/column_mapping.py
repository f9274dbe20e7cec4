"""Column mapping suggestions for setting up a new company profile from a sample export."""

from __future__ import annotations

from typing import NamedTuple, Optional

FIELD_KEYWORDS: dict[str, list[str]] = {
    "address": [
        "street", "address", "addr", "location street", "property address",
        "site address", "physical address", "mailing address", "service address",
        "inspection address", "risk address", "property location", "street address",
        "address line", "address1", "address 1", "addr1", "addr 1",
        "property street", "site street", "loc street", "loc address",
        "insured address", "loss address", "loss location", "premise address",
        "location address", "situs address", "situs", "premises",
    ],
    "city": [
        "city", "town", "municipality", "location city", "property city",
        "site city", "mailing city", "service city", "inspection city",
        "risk city", "insured city", "loss city", "loc city", "premise city",
    ],
    "state": [
        "state", "st", "province", "location state", "property state",
        "site state", "mailing state", "service state", "inspection state",
        "risk state", "insured state", "loss state", "loc state", "premise state",
        "state code", "state/province",
    ],
    "zip": [
        "zip", "zipcode", "zip code", "zip_code", "postal", "postal code",
        "postalcode", "postcode", "post code", "location zip", "property zip",
        "site zip", "mailing zip", "service zip", "inspection zip", "risk zip",
        "insured zip", "loss zip", "loc zip", "premise zip", "zip+4", "zip4",
        "zip 4", "zip+", "postal zip",
    ],
    "insured": [
        "insured", "insured name", "insuredname", "policyholder", "policy holder",
        "customer", "customer name", "client", "client name", "owner", "owner name",
        "property owner", "homeowner", "home owner", "named insured", "insrd",
        "claimant", "claimant name", "account name", "account", "member",
        "member name", "subscriber", "subscriber name", "applicant", "applicant name",
        "name of insured", "name", "full name", "fullname", "contact name",
        "contact", "primary name", "primary contact", "responsible party",
        "loss payee", "loss name", "loss contact",
    ],
    "first_name": [
        "first name", "firstname", "first_name", "fname", "f name", "given name",
        "givenname", "first", "policyholder first", "policy holder first",
        "insured first", "owner first", "customer first", "client first",
        "contact first", "primary first", "member first",
    ],
    "last_name": [
        "last name", "lastname", "last_name", "lname", "l name", "surname",
        "family name", "familyname", "last", "policyholder last", "policy holder last",
        "insured last", "owner last", "customer last", "client last",
        "contact last", "primary last", "member last",
    ],
    "company_name": [
        "company", "company name", "companyname", "business", "business name",
        "businessname", "organization", "org", "org name", "corporation",
        "corp", "corp name", "entity", "entity name", "firm", "firm name",
        "dba", "doing business as", "trade name", "tradename", "commercial name",
        "insured company", "insured business", "policyholder company",
    ],
    "due_date": [
        "due", "due date", "duedate", "due_date", "deadline", "expiration",
        "expiration date", "expire", "expire date", "expires", "target date",
        "target", "completion date", "complete by", "complete date",
        "inspection due", "insp due", "required by", "required date",
        "must complete", "must complete by", "needed by", "need by",
        "turnaround", "tat", "tat date", "sla", "sla date", "commit date",
        "committed date", "promise date", "expected date", "expected by",
        "final date", "end date", "close date", "close by",
    ],
    "appointment_flag": [
        "appt", "appointment", "appointment needed", "appt needed", "needs appt",
        "needs appointment", "appointment required", "appt required", "call ahead",
        "call first", "contact first", "schedule required", "scheduling required",
        "must schedule", "must call", "requires appointment", "requires appt",
        "appointment necessary", "pre-schedule", "preschedule", "appointment?",
        "appt?", "call?", "schedule?", "apt", "apt needed", "apt required",
    ],
    "appointment_date": [
        "appointment date", "appt date", "scheduled date", "schedule date",
        "scheduled for", "appointment scheduled", "appt scheduled",
        "confirmed date", "confirmed appointment", "booked date", "booked for",
        "reservation date", "reserved date", "set date", "arranged date",
        "arranged for", "apptdate", "appointmentdate", "sched date",
    ],
    "schedule_for": [
        "schedule for", "scheduled for", "schedulefor", "scheduled time",
        "schedule time", "appointment time", "appt time", "appointment datetime",
        "appt datetime", "scheduled datetime", "schedule datetime",
        "inspection time", "inspection datetime", "visit time", "visit datetime",
        "arrival time", "arrive by", "arrival datetime", "start time",
        "begin time", "meeting time", "meeting datetime", "time slot",
        "timeslot", "time/date", "date/time", "datetime",
    ],
    "inspection_type": [
        "inspection type", "inspectiontype", "insp type", "type", "service type",
        "servicetype", "order type", "ordertype", "job type", "jobtype",
        "work type", "worktype", "survey type", "surveytype", "visit type",
        "visittype", "form type", "formtype", "category", "classification",
        "class", "product", "product type", "service", "service code",
        "inspection category", "insp category", "work order type", "wo type",
        "high value", "standard", "premium", "basic", "level", "tier",
        "complexity", "scope", "inspection scope",
    ],
    "notes": [
        "notes", "note", "comments", "comment", "remarks", "remark",
        "instructions", "instruction", "special instructions", "special notes",
        "additional info", "additional information", "addl info", "add info",
        "description", "desc", "details", "detail", "memo", "memos",
        "observation", "observations", "internal notes", "field notes",
        "inspector notes", "inspection notes", "attention", "alert",
        "warning", "caution", "important", "special", "other", "misc",
        "miscellaneous", "freeform", "free form", "text", "message",
    ],
    "policy_number": [
        "policy", "policy number", "policynumber", "policy #", "policy#",
        "policy no", "policy num", "pol number", "pol #", "pol#", "pol no",
        "contract", "contract number", "contract #", "contract#", "contract no",
        "account number", "account #", "account#", "account no", "acct",
        "acct number", "acct #", "acct#", "acct no", "reference", "reference #",
        "ref", "ref #", "ref#", "ref no", "reference number", "id", "identifier",
    ],
    "claim_number": [
        "claim", "claim number", "claimnumber", "claim #", "claim#", "claim no",
        "loss number", "loss #", "loss#", "loss no", "case", "case number",
        "case #", "case#", "case no", "file", "file number", "file #", "file#",
        "file no", "incident", "incident number", "incident #", "incident#",
        "report number", "report #", "report#", "report no",
    ],
    "phone": [
        "phone", "telephone", "tel", "phone number", "phonenumber", "phone #",
        "phone#", "contact phone", "contact number", "cell", "cell phone",
        "cellphone", "mobile", "mobile phone", "mobilephone", "home phone",
        "work phone", "office phone", "primary phone", "insured phone",
        "customer phone", "client phone", "daytime phone", "evening phone",
        "callback", "callback number", "call back", "reach at",
    ],
    "email": [
        "email", "e-mail", "email address", "emailaddress", "mail",
        "electronic mail", "contact email", "insured email", "customer email",
        "client email", "primary email", "work email", "personal email",
    ],
    "square_feet": [
        "square feet", "sqft", "sq ft", "sq. ft", "square footage", "squarefeet",
        "squarefootage", "size", "property size", "home size", "building size",
        "living area", "living space", "total sqft", "total sq ft", "area",
        "floor area", "gross area", "heated sqft", "heated sq ft", "footage",
    ],
    "year_built": [
        "year built", "yearbuilt", "year_built", "built", "built year",
        "construction year", "year constructed", "year of construction",
        "age", "building age", "home age", "property age", "vintage",
        "original year", "date built", "build date", "construction date",
    ],
    "property_type": [
        "property type", "propertytype", "dwelling type", "dwellingtype",
        "structure type", "structuretype", "building type", "buildingtype",
        "occupancy", "occupancy type", "use", "property use", "usage",
        "residence type", "residencetype", "home type", "hometype",
        "construction type", "constructiontype", "style", "property style",
    ],
}

FIELD_LABELS: dict[str, str] = {
    "address": "Street Address",
    "city": "City",
    "state": "State",
    "zip": "ZIP Code",
    "insured": "Insured Name",
    "first_name": "First Name",
    "last_name": "Last Name",
    "company_name": "Company Name",
    "due_date": "Due Date",
    "appointment_flag": "Appointment Flag",
    "appointment_date": "Appointment Date",
    "schedule_for": "Schedule DateTime",
    "inspection_type": "Inspection Type",
    "notes": "Notes",
    "policy_number": "Policy Number",
    "claim_number": "Claim Number",
    "phone": "Phone",
    "email": "Email",
    "square_feet": "Square Feet",
    "year_built": "Year Built",
    "property_type": "Property Type",
}

REQUIRED_FIELDS = ["address", "city", "state", "zip"]

# Location first, then names, dates, everything else.
FIELD_PRIORITY = [
    "address", "city", "state", "zip",
    "insured", "first_name", "last_name", "company_name",
    "due_date", "appointment_flag", "appointment_date", "schedule_for",
    "inspection_type", "notes", "phone", "email",
    "policy_number", "claim_number", "square_feet", "year_built", "property_type",
]

EXACT_MATCH_SCORE = 100.0
PARTIAL_MATCH_WEIGHT = 80.0
MIN_SUGGESTION_SCORE = 30.0


class MappingValidation(NamedTuple):
    valid: bool
    missing: list[str]


def _keyword_score(header: str, keyword: str) -> float:
    if header == keyword:
        return EXACT_MATCH_SCORE
    if keyword in header or header in keyword:
        return min(len(keyword), len(header)) / max(len(keyword), len(header)) * PARTIAL_MATCH_WEIGHT
    return 0.0


def suggest_mappings(headers: list[str]) -> dict[str, Optional[str]]:
    """Guess which header feeds each canonical field.

    Fields are assigned greedily in FIELD_PRIORITY order and a header is
    used at most once. A field whose best score does not beat
    MIN_SUGGESTION_SCORE maps to None.
    """
    mappings: dict[str, Optional[str]] = {}
    used: set[str] = set()

    for field in FIELD_PRIORITY:
        best_match: Optional[str] = None
        best_score = 0.0

        for header in headers:
            if header in used:
                continue
            header_lower = header.lower().strip()
            if not header_lower:
                continue
            for keyword in FIELD_KEYWORDS[field]:
                score = _keyword_score(header_lower, keyword)
                if score > best_score:
                    best_score = score
                    best_match = header

        if best_match is not None and best_score > MIN_SUGGESTION_SCORE:
            mappings[field] = best_match
            used.add(best_match)
        else:
            mappings[field] = None

    return mappings


def unmapped_columns(headers: list[str], mappings: dict[str, Optional[str]]) -> list[str]:
    mapped = {v for v in mappings.values() if v is not None}
    return [h for h in headers if h not in mapped]


def generate_company_code(name: str) -> str:
    """Short code from a company name: "Summit Inspection Group" -> "SIG"."""
    words = [w for w in name.split() if len(w) > 2]
    if not words:
        return "NEW"
    if len(words) == 1:
        return words[0][:3].upper()
    return "".join(w[0] for w in words[:3]).upper()


def validate_mappings(mappings: dict[str, Optional[str]]) -> MappingValidation:
    missing = [field for field in REQUIRED_FIELDS if not mappings.get(field)]
    return MappingValidation(valid=not missing, missing=missing)


def format_mappings_for_db(mappings: dict[str, Optional[str]]) -> dict[str, str]:
    """Turn field -> header suggestions into the stored header -> field table."""
    return {header: field for field, header in mappings.items() if header is not None}
