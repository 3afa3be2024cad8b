"""
Plaintext email bodies for the two submission types.

Line order and labels are fixed; every labeled line is emitted even when its
value is empty, so recipients can scan emails by position.

Precedence:
  - survey answers come from additional_info only
  - business name and tracking parameters prefer the flattened attributes,
    then additional_info
"""

from lead_bridge.schemas.mail import LeadKind, NormalizedPayload, RenderedEmail
from lead_bridge.services.fields import lookup, resolve

LEAD_SUBJECT_SUFFIX = " New Business Loan Lead"
PREQUAL_SUBJECT_SUFFIX = " New Pre-Underwriting Survey"

LEAD_ANSWERS: tuple[tuple[str, str], ...] = (
    ("Amount Needed", "answer_58915_xhsj3"),
    ("Monthly Sales", "answer_58915_pisOhMKbrq"),
    ("Time in Business", "answer_58915_nTAMvZ5Ii9"),
    ("Credit Range", "answer_58915_hzBZCKBRoP"),
    ("Industry", "answer_58915_Smg2rDp8Jy"),
)

PREQUAL_ANSWERS: tuple[tuple[str, str], ...] = (
    ("Priority", "answer_88258_xhsj3"),
    ("Timeline", "answer_88258_yzA90Xu4rN"),
    ("Franchise", "answer_88258_vsx7u8gmdl"),
    ("Use of funds", "answer_88258_bSQne6Mvu8"),
    ("Profitable", "answer_88258_S2aVdEDKfJ"),
    ("Tax liens", "answer_88258_wrDsTWxWz8"),
    ("Bankruptcy", "answer_88258_9CmdGjdF79"),
    ("BK Status", "answer_88258_hcvrXeUCVm"),
    ("BK Discharged", "answer_88258_FOa4FSnEam"),
    ("Bank accts", "answer_88258_xSJXMVN7qd"),
    ("Entity", "answer_88258_NdkMRm9tFE"),
    ("Deposits/month", "answer_88258_iR4iPvp9Kz"),
    ("NSFs/month", "answer_88258_f0mbFNkDDb"),
    ("Min daily balance", "answer_88258_iNAeKr99AI"),
    ("Negative days", "answer_88258_X6GIZa4LkX"),
    ("Paying off debt", "answer_88258_qmcAEgk0TN"),
    ("Debt type", "answer_88258_kmluskg5mI"),
    ("Loans count", "answer_88258_sja81P51mR"),
    ("Ever defaulted", "answer_88258_f5C2TCIXZP"),
    ("Ownership", "answer_88258_Aee8ztqutG"),
    ("Property", "answer_88258_ALcdqdVpxa"),
    ("Employees", "answer_88258_RLanLJWhyI"),
)

TRACKING_PARAMS: tuple[tuple[str, str], ...] = (
    ("FB Clid", "fbclid"),
    ("Source", "utm_source"),
    ("Campaign", "utm_campaign"),
    ("Medium", "utm_medium"),
    ("Content", "utm_content"),
)


def template_kind(kind: LeadKind | str, normalized: NormalizedPayload) -> LeadKind:
    """Survey answers in the payload force the prequal template."""
    if normalized.is_prequal:
        return LeadKind.PREQUAL
    return LeadKind(kind)


def render(kind: LeadKind | str, normalized: NormalizedPayload, subject_prefix: str) -> RenderedEmail:
    effective = template_kind(kind, normalized)
    a = normalized.attributes
    add = normalized.additional_info

    if effective is LeadKind.PREQUAL:
        subject = subject_prefix + PREQUAL_SUBJECT_SUFFIX
        lines = [
            *_contact_lines(a, add),
            "Pre-Underwriting Survey Answers:",
            *_answer_lines(PREQUAL_ANSWERS, add),
            "",
            *_tracking_lines(a, add),
        ]
    else:
        subject = subject_prefix + LEAD_SUBJECT_SUFFIX
        lines = [
            *_contact_lines(a, add),
            *_answer_lines(LEAD_ANSWERS, add),
            "",
            *_tracking_lines(a, add),
        ]

    return RenderedEmail(kind=effective, subject=subject, body="\n".join(lines))


def _line(label: str, value: str) -> str:
    return f"{label}: {value}"


def _contact_lines(a: dict, add: dict) -> list[str]:
    first = resolve(a.get("first_name"), lookup(a, "contact_profile", "first_name"))
    last = resolve(a.get("last_name"), lookup(a, "contact_profile", "last_name"))
    return [
        _line("Business Name", resolve(a.get("business_name"), add.get("business_name"))),
        _line("Full Name", " ".join(part for part in (first, last) if part)),
        _line("Email", resolve(a.get("email"), lookup(a, "contact_profile", "email"))),
        _line(
            "Business Phone",
            resolve(a.get("vat_number"), a.get("phone"), lookup(a, "contact_profile", "phone")),
        ),
        _line("Mobile Phone", resolve(a.get("phone"), lookup(a, "contact_profile", "phone"))),
        "",
    ]


def _answer_lines(table: tuple[tuple[str, str], ...], add: dict) -> list[str]:
    return [_line(label, resolve(add.get(key))) for label, key in table]


def _tracking_lines(a: dict, add: dict) -> list[str]:
    return [
        "Tracking Parameters:",
        *(_line(label, resolve(a.get(key), add.get(key))) for label, key in TRACKING_PARAMS),
        "",
    ]
