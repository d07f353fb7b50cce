"""Valid answers for every form step, shared by the step and flow tests."""
from visa_intake.models import FileRef

VALID = {
    "/new/step1": {
        "nameRomaji": "Nguyen Van An",
        "nameNative": "Nguyễn Văn An",
        "birthDate": "2001-05-17",
        "nationality": "Vietnam",
        "homeAddress": "12 Hang Bai, Hanoi",
        "homePhone": "+84-24-1234-5678",
        "email": "an.nguyen@example.com",
    },
    "/new/step2": {
        "passportNumber": "C1234567",
        "passportIssueDate": "2024-01-01",
        "passportExpiryDate": "2030-01-01",
    },
    "/new/step3": {
        "father": {"name": "Nguyen Van Binh", "birthDate": "1970-03-02", "occupation": "Farmer", "address": "Hanoi"},
        "emergencyContact": {"name": "Tran Thi Cuc", "relation": "Mother", "phone": "+84-90-111-2222"},
    },
    "/new/step4": {
        "institutionName": "Hanoi Japanese Center",
        "periodStart": "2023-01-10",
        "periodEnd": "2023-12-20",
        "totalHours": 320,
        "jlptScore": "N4",
    },
    "/new/step5": {"schoolName": "Chu Van An High School", "graduationYear": "2019", "country": "Vietnam"},
    "/new/step6": {},
    "/new/step7": {"hasVisitedJapan": "no", "hasAppliedVisa": "no"},
    "/new/step8": {
        "reasonForJapan": "I want to study Japanese culture and technology in depth at a good school.",
        "reasonForSchool": "The school offers small classes and strong support for university entrance.",
        "futurePlan": "study",
    },
    "/new/step9": {
        "sponsorType": "father",
        "name": "Nguyen Van Binh",
        "phone": "+84-90-333-4444",
        "address": "Hanoi",
        "occupation": "Farmer",
        "employer": "Self-employed",
        "annualIncome": 2400000,
    },
    "/new/step10": {"plannedAddress": "dormitory", "supporter": "family", "partTimeJob": "no"},
    "/renewal/step1": {
        "name": "Pham Thi Dung",
        "birthDate": "2000-08-08",
        "nationality": "Vietnam",
        "address": "1-2-3 Shinjuku, Tokyo",
        "phone": "090-1234-5678",
        "email": "dung@example.com",
    },
    "/renewal/step1b": {
        "residenceCardNumber": "AB12345678CD",
        "residenceExpiry": "2025-04-01",
        "passportNumber": "C7654321",
        "passportExpiry": "2031-01-01",
    },
    "/renewal/step2": {"address": "1-2-3 Shinjuku, Tokyo", "rent": 45000, "supporter": "self"},
    "/renewal/step3": {"hasPartTimeJob": "no"},
    "/renewal/step4": {"sponsorName": "Pham Van Em", "relation": "Father", "annualIncome": 1800000},
}

REQUIRED_FILES = {
    "/new/step2": ["passport"],
    "/new/step4": ["proof"],
    "/new/step5": ["diploma", "transcript"],
    "/new/step9": ["balance", "statement", "letter"],
}


def pdf(name):
    return FileRef(name=f"{name}.pdf")


def fill(ctl, route=None):
    """Apply the valid answers and required files for ``ctl``'s step."""
    route = route or ctl.step.route
    for name, value in VALID[route].items():
        ctl.edit(name, value)
    for slot in REQUIRED_FILES.get(route, []):
        ctl.set_file(slot, pdf(slot))
