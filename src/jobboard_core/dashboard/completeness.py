"""Profile completion percentage shown on both dashboards."""

from typing import Any

from jobboard_core.models.entities import Account, JobSeekerProfile, RecruiterProfile

_JOB_SEEKER_FIELDS = ("skills", "availability", "cv", "linkedin", "portfolio", "experience", "education")
_RECRUITER_FIELDS = (
    "company_name",
    "company",
    "position",
    "company_logo",
    "company_website",
    "company_description",
    "kvk_number",
)
_ADDRESS_FIELDS = ("street", "house_number", "postal_code", "city", "country")


def _filled(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    if isinstance(value, (list, tuple, dict)):
        return len(value) > 0
    return True


def profile_completion(account: Account) -> int:
    """Percentage (0-100) of filled base and role-specific profile fields."""
    values: list[Any] = [account.display_name, account.email, account.phone_number]
    profile = account.profile
    if isinstance(profile, RecruiterProfile):
        values += [getattr(profile, f) for f in _RECRUITER_FIELDS]
        values += [account.address.city, account.address.postal_code]
    elif isinstance(profile, JobSeekerProfile):
        values += [getattr(account.address, f) for f in _ADDRESS_FIELDS]
        # A structured CV counts as a CV
        values += [getattr(profile, f) if f != "cv" else (profile.cv or profile.detailed_cv) for f in _JOB_SEEKER_FIELDS]
    filled = sum(1 for v in values if _filled(v))
    return round(filled * 100 / len(values))
