"""Fixed sample data written the first time the collection is read empty."""

import copy
import time

from contactbook.models.domain.contact_domain import Contact
from contactbook.services.record_normalizer import normalize_record

DAY_MS = 1000 * 60 * 60 * 24

SAMPLE_CONTACTS: tuple[dict, ...] = (
    {
        "id": "seed-ava-nguyen",
        "first": "Ava",
        "last": "Nguyen",
        "avatarUrl": "https://avatar.iran.liara.run/public/2",
        "twitterHandle": "ava_codes",
        "email": "ava.nguyen@example.com",
        "phone": "+84 90 123 4567",
        "company": "Pixel Forge",
        "category": "work",
        "favorite": True,
        "tags": ["design", "ux", "mentor"],
        "location": "Ho Chi Minh City, VN",
        "notes": "Product designer leading our new dashboard modernization effort. "
        "Loves quick feedback cycles.",
    },
    {
        "id": "seed-leo-phan",
        "first": "Leo",
        "last": "Phan",
        "avatarUrl": "https://avatar.iran.liara.run/public/job/doctor/female",
        "twitterHandle": "drleophan",
        "email": "leo.phan@mediplus.vn",
        "phone": "+84 28 3824 8888",
        "company": "MediPlus Clinic",
        "category": "services",
        "favorite": False,
        "tags": ["health", "family"],
        "location": "District 3, HCMC",
        "notes": "Family doctor. Send the updated insurance card before the next visit.",
    },
    {
        "id": "seed-minh-vo",
        "first": "Minh",
        "last": "Vo",
        "avatarUrl": "https://avatar.iran.liara.run/public/job/designer/male",
        "twitterHandle": "minhvo_dev",
        "email": "minh.vo@stellar.app",
        "phone": "+1 415 555 0110",
        "company": "Stellar Apps",
        "category": "friends",
        "favorite": True,
        "tags": ["react", "speaker"],
        "location": "San Francisco, USA",
        "notes": "Frontend lead at Stellar. Co-speaker for React Summit panel. "
        "Prefers async communication.",
    },
    {
        "id": "seed-chi-nguyen",
        "first": "Chi",
        "last": "Nguyen",
        "avatarUrl": "https://avatar.iran.liara.run/public/job/operator/female",
        "twitterHandle": "chi_calls",
        "email": "chi.nguyen@helpline.vn",
        "phone": "+84 28 7100 8899",
        "company": "Helpline VN",
        "category": "community",
        "favorite": False,
        "tags": ["volunteer", "support"],
        "location": "Can Tho, VN",
        "notes": "Coordinates the weekend volunteer hotline. Share monthly metrics by the 5th.",
    },
    {
        "id": "seed-khang-le",
        "first": "Khang",
        "last": "Le",
        "avatarUrl": "https://avatar.iran.liara.run/public/job/teacher/male",
        "twitterHandle": "teacherkhang",
        "email": "khang.le@brightfuture.edu",
        "phone": "+84 24 3773 2666",
        "company": "Bright Future Academy",
        "category": "family",
        "favorite": False,
        "tags": ["education"],
        "location": "Hanoi, VN",
        "notes": "Mai's homeroom teacher. Schedule parent conference during the first week "
        "of next semester.",
    },
    {
        "id": "seed-ella-vo",
        "first": "Ella",
        "last": "Vo",
        "avatarUrl": "https://avatar.iran.liara.run/public/job/astronomer/male",
        "twitterHandle": "ella_in_space",
        "email": "ella.vo@astro-labs.org",
        "phone": "+44 20 7946 0958",
        "company": "Astro Labs",
        "category": "vip",
        "favorite": True,
        "tags": ["investor", "science"],
        "location": "London, UK",
        "notes": "Key advisor for the STEM scholarship fund. Visiting Vietnam in December, "
        "plan a meetup.",
    },
)


def build_sample_contacts(now_ms: int | None = None) -> list[Contact]:
    """
    Fresh Contact objects for the sample set, one day apart, newest first.
    Each call deep-copies the static table so stored records never alias it.
    """
    now_ms = int(time.time() * 1000) if now_ms is None else now_ms
    contacts = []
    for index, raw in enumerate(copy.deepcopy(SAMPLE_CONTACTS)):
        raw["createdAt"] = now_ms - index * DAY_MS
        contacts.append(normalize_record(raw))
    return contacts
