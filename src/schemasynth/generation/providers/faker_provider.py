"""Faker-based leaf provider for person and company records."""

from datetime import date
from typing import Any, Dict, Optional
from faker import Faker
from schemasynth.ir.schema import Archetype
from schemasynth.errors import UnsupportedLocaleError
from schemasynth.generation.constants import EMPLOYEE_COUNT_BANDS, INDUSTRIES

# Short locale codes -> Faker locales
LOCALE_MAP = {
    "en": "en_US",
    "fr": "fr_FR",
    "de": "de_DE",
    "es": "es_ES",
    "ja": "ja_JP",
}

# Faker names the first-level region differently per locale
_REGION_FIELDS = ("state", "administrative_unit", "prefecture", "region")


def resolve_locale(locale: Optional[str]) -> str:
    """
    Map a locale hint to a Faker locale.

    Accepts the short codes in LOCALE_MAP or their Faker names.

    Raises:
        UnsupportedLocaleError: For any other locale
    """
    if locale is None:
        return LOCALE_MAP["en"]
    key = locale.strip()
    if key.lower() in LOCALE_MAP:
        return LOCALE_MAP[key.lower()]
    if key in LOCALE_MAP.values():
        return key
    raise UnsupportedLocaleError(
        f"Unsupported locale: {locale}. Supported locales: {', '.join(LOCALE_MAP)}"
    )


class FakerLeafProvider:
    """Leaf provider backed by a seeded, per-instance Faker."""

    def __init__(self, seed: int, locale: Optional[str] = None):
        """
        Initialize Faker provider.

        Args:
            seed: Seed for this provider's own random stream
            locale: Locale hint (default: "en")
        """
        self.seed = seed
        self.locale = resolve_locale(locale)
        self.fk = Faker(self.locale)
        self.fk.seed_instance(seed)

    def generate(self, archetype: Archetype, **options: Any) -> Dict[str, Any]:
        archetype = Archetype(archetype)
        if archetype == Archetype.PERSON:
            return self.person(**options)
        if archetype == Archetype.COMPANY:
            return self.company(**options)
        raise ValueError(f"No leaf fields for archetype '{archetype.value}'")

    def person(
        self,
        include_address: bool = True,
        include_phone: bool = True,
        include_date_of_birth: bool = False,
    ) -> Dict[str, Any]:
        first_name = self.fk.first_name()
        last_name = self.fk.last_name()

        person: Dict[str, Any] = {
            "firstName": first_name,
            "lastName": last_name,
            "fullName": f"{first_name} {last_name}",
            "email": self._email(f"{first_name}.{last_name}"),
        }
        if include_phone:
            person["phone"] = self.fk.phone_number()
        if include_date_of_birth:
            person["dateOfBirth"] = self.fk.date_of_birth(
                minimum_age=18, maximum_age=100
            ).isoformat()
        if include_address:
            person["address"] = self.address()
        return person

    def company(
        self,
        include_address: bool = True,
        include_phone: bool = True,
        include_website: bool = True,
        include_founded_year: bool = False,
        include_employee_count: bool = False,
    ) -> Dict[str, Any]:
        name = self.fk.company()

        company: Dict[str, Any] = {
            "name": name,
            "industry": self.fk.random_element(INDUSTRIES),
            "email": self._email(f"{name.split(' ')[0]}.contact"),
        }
        if include_phone:
            company["phone"] = self.fk.phone_number()
        if include_website:
            company["website"] = self.fk.url()
        if include_founded_year:
            company["founded"] = self.fk.random_int(1900, date.today().year)
        if include_employee_count:
            company["employeeCount"] = self._employee_count()
        if include_address:
            company["address"] = self.address()
        return company

    def address(self) -> Dict[str, str]:
        return {
            "street": self.fk.street_address(),
            "city": self.fk.city(),
            "state": self._region(),
            "postalCode": self.fk.postcode(),
            "country": self.fk.country(),
        }

    def _email(self, local_part: str) -> str:
        local = "".join(c for c in local_part.lower() if c.isalnum() or c == ".")
        if not local.isascii() or not local.strip("."):
            local = self.fk.user_name()
        return f"{local.strip('.')}@{self.fk.free_email_domain()}".lower()

    def _region(self) -> str:
        for name in _REGION_FIELDS:
            try:
                return getattr(self.fk, name)()
            except AttributeError:
                continue
        return self.fk.city()

    def _employee_count(self) -> int:
        # Weighted towards small companies
        roll = self.fk.random.random()
        cumulative = 0.0
        for weight, low, high in EMPLOYEE_COUNT_BANDS:
            cumulative += weight
            if roll < cumulative:
                return self.fk.random_int(low, high)
        _, low, high = EMPLOYEE_COUNT_BANDS[-1]
        return self.fk.random_int(low, high)
