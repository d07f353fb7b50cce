"""Step definitions for both application flows.

Each route of the wizard is described once here: its inputs, cross-field
rules, file slots, progress position and the route to advance to. Pages are
rendered and validated from this table; nothing else knows about individual
fields.
"""
from __future__ import annotations

from dataclasses import dataclass
from functools import cached_property
from typing import Any, Dict, Mapping, Optional, Tuple, Type

from core.rules import DateAfter, RequiredWhen
from core.schema import (
    DATE,
    EMAIL,
    GROUP,
    NUMBER,
    PASSWORD,
    PHONE_REGEX,
    RADIO,
    SELECT,
    TEL,
    TEXT,
    TEXTAREA,
    FieldSpec,
    StepModel,
    build_model,
)

FORM = "form"
DOCUMENTS = "documents"
CONFIRM = "confirm"
CHOOSER = "chooser"

HOME_ROUTE = "/"
LOGIN_ROUTE = "/login"
SELECT_TYPE_ROUTE = "/select-type"
COMPLETE_ROUTE = "/complete"

YES_NO = ("yes", "no")


class UnknownStepError(KeyError):
    """Raised when a route has no step definition."""


@dataclass(frozen=True)
class FileInput:
    """A file input whose picked name is stored as ``<name>FileName``.

    ``required_when`` is a ``(field, value)`` pair; the slot is only required
    when that field currently holds ``value``.
    """

    name: str
    label: str
    required: bool = False
    required_when: Optional[Tuple[str, str]] = None
    error: Optional[str] = None
    accept: Tuple[str, ...] = ("png", "jpg", "jpeg", "pdf")

    @property
    def draft_key(self) -> str:
        return f"{self.name}FileName"

    def is_required(self, values: Mapping[str, Any]) -> bool:
        if self.required_when is not None:
            field, expected = self.required_when
            return values.get(field) == expected
        return self.required


@dataclass(frozen=True)
class StepDefinition:
    route: str
    namespace: str
    fields: Tuple[FieldSpec, ...] = ()
    rules: Tuple[Any, ...] = ()
    files: Tuple[FileInput, ...] = ()
    files_error: Optional[str] = None
    next_route: str = ""
    position: int = 0
    total: int = 0
    kind: str = FORM
    persist: bool = True
    delay_setting: Optional[str] = None

    @cached_property
    def model(self) -> Type[StepModel]:
        return build_model(self.fields, self.route)

    @property
    def field_names(self) -> Tuple[str, ...]:
        return tuple(spec.name for spec in self.fields)

    @property
    def draft_keys(self) -> Tuple[str, ...]:
        """Every draft key this step writes on submission."""
        return self.field_names + tuple(slot.draft_key for slot in self.files)

    def field(self, name: str) -> FieldSpec:
        for spec in self.fields:
            if spec.name == name:
                return spec
        raise KeyError(name)


def _errors(namespace: str):
    return lambda name: f"{namespace}.errors.{name}"


def _required(name: str, key: str, kind: str = TEXT, **extra) -> FieldSpec:
    return FieldSpec(name=name, kind=kind, required=key, **extra)


def _optional(name: str, kind: str = TEXT, **extra) -> FieldSpec:
    return FieldSpec(name=name, kind=kind, **extra)


# ── New application ─────────────────────────────────────────

NEW_TOTAL = 10

_n1 = "newApplication.step1"
_e = _errors(_n1)
NEW_STEP1 = StepDefinition(
    route="/new/step1",
    namespace=_n1,
    fields=(
        _required("nameRomaji", _e("nameRomajiRequired")),
        _required("nameNative", _e("nameNativeRequired")),
        _required("birthDate", _e("birthDateRequired"), DATE),
        _required(
            "nationality",
            _e("nationalityRequired"),
            SELECT,
            options=("China", "Vietnam", "Nepal", "Other"),
        ),
        _required("homeAddress", _e("homeAddressRequired")),
        _required(
            "homePhone",
            _e("homePhoneRequired"),
            TEL,
            pattern=PHONE_REGEX,
            invalid=_e("homePhoneInvalid"),
        ),
        _required("email", _e("emailRequired"), EMAIL, invalid=_e("emailInvalid")),
    ),
    next_route="/new/step2",
    position=1,
    total=NEW_TOTAL,
)

_n2 = "newApplication.step2"
_e = _errors(_n2)
NEW_STEP2 = StepDefinition(
    route="/new/step2",
    namespace=_n2,
    fields=(
        _required("passportNumber", _e("passportNumberRequired")),
        _required("passportIssueDate", _e("passportIssueDateRequired"), DATE),
        _required("passportExpiryDate", _e("passportExpiryDateRequired"), DATE),
    ),
    rules=(DateAfter("passportIssueDate", "passportExpiryDate", _e("passportExpiryInvalid")),),
    files=(
        FileInput(
            "passport",
            label=f"{_n2}.files.passport",
            required=True,
            error=_e("passportFileRequired"),
        ),
    ),
    next_route="/new/step3",
    position=2,
    total=NEW_TOTAL,
)

_n3 = "newApplication.step3"
_e = _errors(_n3)


def _parent(name: str) -> FieldSpec:
    return FieldSpec(
        name=name,
        kind=GROUP,
        children=(
            _optional("name"),
            _optional("birthDate", DATE),
            _optional("occupation"),
            _optional("address"),
        ),
    )


NEW_STEP3 = StepDefinition(
    route="/new/step3",
    namespace=_n3,
    fields=(
        _parent("father"),
        _parent("mother"),
        FieldSpec(
            name="emergencyContact",
            kind=GROUP,
            children=(
                _required("name", _e("nameRequired")),
                _required("relation", _e("relationRequired")),
                _required("phone", _e("phoneRequired"), TEL),
            ),
        ),
    ),
    next_route="/new/step4",
    position=3,
    total=NEW_TOTAL,
)

_n4 = "newApplication.step4"
_e = _errors(_n4)
NEW_STEP4 = StepDefinition(
    route="/new/step4",
    namespace=_n4,
    fields=(
        _required("institutionName", _e("institutionNameRequired")),
        _required("periodStart", _e("periodStartRequired"), DATE),
        _required("periodEnd", _e("periodEndRequired"), DATE),
        _required("totalHours", _e("totalHoursRequired"), NUMBER, min_value=1),
        _optional("jlptScore"),
    ),
    rules=(DateAfter("periodStart", "periodEnd", _e("periodEndInvalid")),),
    files=(
        FileInput("proof", label=f"{_n4}.files.proof", required=True, error=_e("proofFileRequired")),
        FileInput("jlpt", label=f"{_n4}.files.jlpt"),
    ),
    next_route="/new/step5",
    position=4,
    total=NEW_TOTAL,
)

_n5 = "newApplication.step5"
_e = _errors(_n5)
NEW_STEP5 = StepDefinition(
    route="/new/step5",
    namespace=_n5,
    fields=(
        _required("schoolName", _e("schoolNameRequired")),
        _required("graduationYear", _e("graduationYearRequired")),
        _required("country", _e("countryRequired")),
    ),
    files=(
        FileInput(
            "diploma",
            label=f"{_n5}.files.diploma",
            required=True,
            error=_e("diplomaFileRequired"),
        ),
        FileInput(
            "transcript",
            label=f"{_n5}.files.transcript",
            required=True,
            error=_e("transcriptFileRequired"),
        ),
    ),
    files_error=_e("filesRequired"),
    next_route="/new/step6",
    position=5,
    total=NEW_TOTAL,
)

_n6 = "newApplication.step6"
NEW_STEP6 = StepDefinition(
    route="/new/step6",
    namespace=_n6,
    fields=(
        _optional("companyName"),
        _optional("period"),
        _optional("jobDescription", TEXTAREA),
    ),
    next_route="/new/step7",
    position=6,
    total=NEW_TOTAL,
)

_n7 = "newApplication.step7"
_e = _errors(_n7)
NEW_STEP7 = StepDefinition(
    route="/new/step7",
    namespace=_n7,
    fields=(
        _required("hasVisitedJapan", _e("selectRequired"), RADIO, options=YES_NO),
        _optional("visitDate", DATE),
        _optional("visitPurpose"),
        _required("hasAppliedVisa", _e("selectRequired"), RADIO, options=YES_NO),
        _optional("applicationDetails", TEXTAREA),
    ),
    rules=(
        RequiredWhen(
            "hasVisitedJapan",
            "yes",
            (
                ("visitDate", _e("visitDateRequired")),
                ("visitPurpose", _e("visitPurposeRequired")),
            ),
        ),
        RequiredWhen(
            "hasAppliedVisa",
            "yes",
            (("applicationDetails", _e("applicationDetailsRequired")),),
        ),
    ),
    next_route="/new/step8",
    position=7,
    total=NEW_TOTAL,
)

_n8 = "newApplication.step8"
_e = _errors(_n8)
NEW_STEP8 = StepDefinition(
    route="/new/step8",
    namespace=_n8,
    fields=(
        _required(
            "reasonForJapan",
            _e("minLength"),
            TEXTAREA,
            min_length=50,
            too_short=_e("minLength"),
        ),
        _required(
            "reasonForSchool",
            _e("minLength"),
            TEXTAREA,
            min_length=50,
            too_short=_e("minLength"),
        ),
        _required(
            "futurePlan",
            _e("selectRequired"),
            SELECT,
            options=("study", "work", "undecided"),
        ),
    ),
    next_route="/new/step9",
    position=8,
    total=NEW_TOTAL,
)

_n9 = "newApplication.step9"
_e = _errors(_n9)
NEW_STEP9 = StepDefinition(
    route="/new/step9",
    namespace=_n9,
    fields=(
        _required(
            "sponsorType",
            _e("selectRequired"),
            SELECT,
            options=("father", "mother", "self", "other"),
        ),
        _required("name", _e("nameRequired")),
        _required("phone", _e("phoneRequired"), TEL),
        _required("address", _e("addressRequired")),
        _required("occupation", _e("occupationRequired")),
        _required("employer", _e("employerRequired")),
        _required("annualIncome", _e("annualIncomeRequired"), NUMBER, min_value=1),
    ),
    files=(
        FileInput("balance", label=f"{_n9}.files.balance", required=True, error=_e("balanceFileRequired")),
        FileInput(
            "statement",
            label=f"{_n9}.files.statement",
            required=True,
            error=_e("statementFileRequired"),
        ),
        FileInput("letter", label=f"{_n9}.files.letter", required=True, error=_e("letterFileRequired")),
    ),
    files_error=_e("filesRequired"),
    next_route="/new/step10",
    position=9,
    total=NEW_TOTAL,
)

_n10 = "newApplication.step10"
_e = _errors(_n10)
NEW_STEP10 = StepDefinition(
    route="/new/step10",
    namespace=_n10,
    fields=(
        _required(
            "plannedAddress",
            _e("inputRequired"),
            SELECT,
            options=("dormitory", "apartment", "relative", "undecided"),
        ),
        _required(
            "supporter",
            _e("selectRequired"),
            SELECT,
            options=("self", "family", "scholarship", "other"),
        ),
        _required("partTimeJob", _e("selectRequired"), RADIO, options=YES_NO),
        _optional("partTimeJobReason", TEXTAREA),
    ),
    rules=(RequiredWhen("partTimeJob", "yes", (("partTimeJobReason", _e("reasonRequired")),)),),
    next_route="/new/confirm",
    position=10,
    total=NEW_TOTAL,
)

_nc = "newApplication.confirm"
NEW_CONFIRM = StepDefinition(
    route="/new/confirm",
    namespace=_nc,
    files=tuple(
        FileInput(name, label=f"{_nc}.files.{name}", required=True)
        for name in (
            "passport",
            "proof",
            "jlpt",
            "diploma",
            "transcript",
            "balance",
            "statement",
            "letter",
        )
    ),
    next_route=COMPLETE_ROUTE,
    position=11,
    total=11,
    kind=CONFIRM,
    persist=False,
    delay_setting="SUBMIT_DELAY_SECONDS",
)

# ── Renewal ─────────────────────────────────────────────────

RENEWAL_TOTAL = 7
_SUPPORTERS = ("self", "family", "scholarship", "other")

_r1 = "renewal.step1"
_e = _errors(_r1)
RENEWAL_STEP1 = StepDefinition(
    route="/renewal/step1",
    namespace=_r1,
    fields=(
        _required("name", _e("nameRequired")),
        _required("birthDate", _e("birthDateRequired"), DATE),
        _required("nationality", _e("nationalityRequired")),
        _required("address", _e("addressRequired")),
        _required("phone", _e("phoneRequired"), TEL),
        _required("email", _e("emailInvalid"), EMAIL, invalid=_e("emailInvalid")),
    ),
    next_route="/renewal/step1b",
    position=1,
    total=RENEWAL_TOTAL,
)

_r1b = "renewal.step1b"
_e = _errors(_r1b)
RENEWAL_STEP1B = StepDefinition(
    route="/renewal/step1b",
    namespace=_r1b,
    fields=(
        _required("residenceCardNumber", _e("residenceCardNumberRequired")),
        _required("residenceExpiry", _e("residenceExpiryRequired"), DATE),
        _required("passportNumber", _e("passportNumberRequired")),
        _required("passportExpiry", _e("passportExpiryRequired"), DATE),
    ),
    files=(
        FileInput("residenceCard", label=f"{_r1b}.files.residenceCard"),
        FileInput("passport", label=f"{_r1b}.files.passport"),
    ),
    next_route="/renewal/step2",
    position=2,
    total=RENEWAL_TOTAL,
)

_r2 = "renewal.step2"
_e = _errors(_r2)
RENEWAL_STEP2 = StepDefinition(
    route="/renewal/step2",
    namespace=_r2,
    fields=(
        _required("address", _e("addressRequired")),
        _required("rent", _e("rentRequired"), NUMBER, min_value=0),
        _required("supporter", _e("supporterRequired"), SELECT, options=_SUPPORTERS),
    ),
    next_route="/renewal/step3",
    position=3,
    total=RENEWAL_TOTAL,
)

_r3 = "renewal.step3"
_e = _errors(_r3)
RENEWAL_STEP3 = StepDefinition(
    route="/renewal/step3",
    namespace=_r3,
    fields=(
        _required("hasPartTimeJob", _e("selectRequired"), RADIO, options=YES_NO, default="no"),
        _optional("employerName"),
        _optional("employerAddress"),
        _optional("weeklyHours", NUMBER),
        _optional("monthlyIncome", NUMBER),
    ),
    rules=(
        RequiredWhen(
            "hasPartTimeJob",
            "yes",
            (
                ("employerName", _e("employerNameRequired")),
                ("employerAddress", _e("employerAddressRequired")),
                ("weeklyHours", _e("weeklyHoursRequired")),
                ("monthlyIncome", _e("monthlyIncomeRequired")),
            ),
        ),
    ),
    files=(
        FileInput(
            "payslip",
            label=f"{_r3}.files.payslip",
            required_when=("hasPartTimeJob", "yes"),
            error=_e("payslipFileRequired"),
        ),
    ),
    next_route="/renewal/step4",
    position=4,
    total=RENEWAL_TOTAL,
)

_r4 = "renewal.step4"
_e = _errors(_r4)
RENEWAL_STEP4 = StepDefinition(
    route="/renewal/step4",
    namespace=_r4,
    fields=(
        _required("sponsorName", _e("sponsorNameRequired")),
        _required("relation", _e("relationRequired")),
        _required("annualIncome", _e("annualIncomeRequired"), NUMBER, min_value=1),
        _optional("remittanceAmount", NUMBER),
    ),
    files=(FileInput("remittance", label=f"{_r4}.files.remittance"),),
    next_route="/renewal/step5",
    position=5,
    total=RENEWAL_TOTAL,
)

_r5 = "renewal.step5"
RENEWAL_STEP5 = StepDefinition(
    route="/renewal/step5",
    namespace=_r5,
    files=(
        FileInput("residenceCard", label=f"{_r5}.files.residenceCard", required=True),
        FileInput("passport", label=f"{_r5}.files.passport", required=True),
        FileInput(
            "payslip",
            label=f"{_r5}.files.payslip",
            required_when=("hasPartTimeJob", "yes"),
        ),
        FileInput(
            "remittance",
            label=f"{_r5}.files.remittance",
            required_when=("supporter", "family"),
        ),
    ),
    next_route="/renewal/step6",
    position=6,
    total=RENEWAL_TOTAL,
    kind=DOCUMENTS,
)

_r6 = "renewal.step6"
RENEWAL_STEP6 = StepDefinition(
    route="/renewal/step6",
    namespace=_r6,
    files=(
        FileInput("residenceCard", label=f"{_r6}.files.residenceCard", required=True),
        FileInput("passport", label=f"{_r6}.files.passport", required=True),
        FileInput(
            "payslip",
            label=f"{_r6}.files.payslip",
            required_when=("hasPartTimeJob", "yes"),
        ),
        FileInput("remittance", label=f"{_r6}.files.remittance"),
    ),
    next_route=COMPLETE_ROUTE,
    position=7,
    total=RENEWAL_TOTAL,
    kind=CONFIRM,
    persist=False,
    delay_setting="SUBMIT_DELAY_SECONDS",
)

# ── Entry pages ─────────────────────────────────────────────

LOGIN = StepDefinition(
    route=LOGIN_ROUTE,
    namespace="login",
    fields=(
        _required("email", "login.errors.invalidEmail", EMAIL, invalid="login.errors.invalidEmail"),
        _required("password", "login.errors.required", PASSWORD),
    ),
    next_route=SELECT_TYPE_ROUTE,
    persist=False,
    delay_setting="LOGIN_DELAY_SECONDS",
)

SELECT_TYPE = StepDefinition(
    route=SELECT_TYPE_ROUTE,
    namespace="selectType",
    fields=(
        _required(
            "applicationType",
            "selectType.errors.selectType",
            RADIO,
            options=("new", "renewal"),
        ),
    ),
    kind=CHOOSER,
    persist=False,
)

ALL_STEPS: Tuple[StepDefinition, ...] = (
    LOGIN,
    SELECT_TYPE,
    NEW_STEP1,
    NEW_STEP2,
    NEW_STEP3,
    NEW_STEP4,
    NEW_STEP5,
    NEW_STEP6,
    NEW_STEP7,
    NEW_STEP8,
    NEW_STEP9,
    NEW_STEP10,
    NEW_CONFIRM,
    RENEWAL_STEP1,
    RENEWAL_STEP1B,
    RENEWAL_STEP2,
    RENEWAL_STEP3,
    RENEWAL_STEP4,
    RENEWAL_STEP5,
    RENEWAL_STEP6,
)

STEPS: Dict[str, StepDefinition] = {step.route: step for step in ALL_STEPS}


def get_step(route: str) -> StepDefinition:
    try:
        return STEPS[route]
    except KeyError:
        raise UnknownStepError(route) from None
