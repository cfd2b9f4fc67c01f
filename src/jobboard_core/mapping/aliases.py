"""Alternate source key names per canonical field (Dutch/English, legacy/current)."""

# Identity
ID_ALIASES = ("uid", "_id", "docId", "documentId")

# Account
EMAIL_ALIASES = ("emailAddress", "mail", "emailadres")
DISPLAY_NAME_ALIASES = ("fullName", "name", "naam", "volledigeNaam")
PHONE_ALIASES = ("phone", "telefoon", "telefoonnummer", "profile.phoneNumber")
PHOTO_ALIASES = ("profilePhoto", "profileImageURL", "photoURL", "profile.profilePhoto")
CREATED_AT_ALIASES = ("aanmaakDatum", "created", "createdOn", "registrationDate")
UPDATED_AT_ALIASES = ("gewijzigdOp", "modifiedAt", "lastUpdated")

# Role fields, checked in this order by RoleResolver
USER_TYPE_KEY = "userType"
ROLE_KEY = "role"
PROFILE_USER_TYPE_KEY = "profile.userType"

# Job seeker profile (profile.* wins over the flat legacy key)
SKILLS_ALIASES = ("profile.skills", "skills", "vaardigheden")
AVAILABILITY_ALIASES = ("profile.availability", "availability", "beschikbaarheid")
CV_ALIASES = ("profile.cv", "cv", "cvUrl", "profile.cvUrl")
DETAILED_CV_ALIASES = ("profile.detailedCV", "detailedCV")
EXPERIENCE_ALIASES = (
    "profile.experience",
    "experience",
    "werkervaring",
    "workExperience",
    "detailedCV.werkervaring",
)
EDUCATION_ALIASES = ("profile.education", "education", "opleiding", "opleidingen", "detailedCV.opleiding")
LINKEDIN_ALIASES = ("profile.linkedin", "linkedin", "linkedinUrl")
PORTFOLIO_ALIASES = ("profile.portfolio", "portfolio", "portfolioUrl")
COVER_LETTER_ALIASES = ("profile.coverLetter", "coverLetter", "motivatiebrief")
AVAILABLE_FOR_WORK_ALIASES = ("profile.isAvailableForWork", "isAvailableForWork", "beschikbaarVoorWerk")

# Recruiter profile
COMPANY_NAME_ALIASES = ("profile.companyName", "companyName", "bedrijfsnaam")
COMPANY_ALIASES = ("profile.company", "company", "bedrijf")
COMPANY_WEBSITE_ALIASES = ("profile.companyWebsite", "companyWebsite", "website")
COMPANY_DESCRIPTION_ALIASES = ("profile.companyDescription", "companyDescription", "bedrijfsomschrijving")
COMPANY_LOGO_ALIASES = ("profile.companyLogo", "companyLogo", "logo")
POSITION_ALIASES = ("profile.position", "position", "functie")
KVK_ALIASES = ("profile.kvkNumber", "kvkNumber", "kvk", "kvkNummer")
INDUSTRY_ALIASES = ("profile.industry", "industry", "branche")

# Address (nested address.* wins over flat legacy keys)
STREET_ALIASES = ("address.street", "street", "straat", "straatnaam")
HOUSE_NUMBER_ALIASES = ("address.houseNumber", "houseNumber", "huisnummer")
POSTAL_CODE_ALIASES = ("address.postalCode", "postalCode", "postcode", "zipCode")
CITY_ALIASES = ("address.city", "city", "plaats", "woonplaats", "stad")
COUNTRY_ALIASES = ("address.country", "country", "land")

# Keys RoleResolver inspects for recruiter-only structure, at any nesting level
RECRUITER_MARKER_KEYS = ("companyName", "kvkNumber", "kvk", "kvkNummer", "companyDescription")

# Keys whose non-empty array value marks a job seeker
JOB_SEEKER_ARRAY_KEYS = ("werkervaring", "experience", "workExperience", "skills", "education", "opleiding")

# Keys whose presence alone marks a job seeker (CV structure)
JOB_SEEKER_CV_KEYS = ("cv", "cvUrl", "detailedCV")

# Job posting
TITLE_ALIASES = ("titel", "jobTitle", "functie", "functieTitel")
JOB_COMPANY_ALIASES = ("companyName", "bedrijf", "bedrijfsnaam")
LOCATION_ALIASES = ("locatie", "plaats", "werklocatie", "city")
DESCRIPTION_ALIASES = ("beschrijving", "omschrijving", "summary")
SALARY_ALIASES = ("salaris", "salaryRange")
STATUS_ALIASES = ("state", "jobStatus")
FULL_TIME_ALIASES = ("fullTime", "voltijd")
REMOTE_ALIASES = ("remote", "thuiswerk")
REQUIREMENTS_ALIASES = ("eisen", "vereisten")
RECRUITER_ID_ALIASES = ("ownerId", "createdBy", "userId")

# Application
JOB_ID_ALIASES = ("vacatureId", "postingId", "job.id")
JOB_TITLE_ALIASES = ("vacatureTitel", "functie", "job.title", "title")
APPLICANT_ID_ALIASES = ("applicantId", "candidateId", "kandidaatId", "userId")
APPLICANT_NAME_ALIASES = ("candidateName", "naam", "name", "displayName")
APPLIED_AT_ALIASES = ("submittedAt", "sollicitatieDatum", "createdAt", "datum")
MOTIVATION_ALIASES = ("motivatie", "coverLetter", "motivatiebrief")
CV_URL_ALIASES = ("cv", "resumeUrl")
CV_FILE_SIZE_ALIASES = ("fileSize", "cvSize", "bestandsgrootte")
APPLICATION_COMPANY_ALIASES = ("company", "bedrijf")

# Meeting
MEETING_TITLE_ALIASES = ("titel", "onderwerp", "subject", "summary")
CANDIDATE_ID_ALIASES = ("kandidaatId", "attendeeId", "applicantId")
CANDIDATE_NAME_ALIASES = ("kandidaatNaam", "attendeeName", "applicantName")
STARTS_AT_ALIASES = ("dateTime", "start", "startTime", "startDatum", "datum")
ENDS_AT_ALIASES = ("endDateTime", "end", "endTime", "eindDatum")
DURATION_ALIASES = ("duration", "duur")
LOCATION_TYPE_ALIASES = ("type", "meetingType")
MEETING_LINK_ALIASES = ("link", "videoLink", "url")
NOTES_ALIASES = ("notities", "opmerkingen", "description")

# Favorite
OWNER_ID_ALIASES = ("userId", "ownerId", "recruiterId")
FAVORITE_JOB_TARGET_KEYS = ("jobId", "vacatureId", "postingId")
FAVORITE_CANDIDATE_TARGET_KEYS = ("candidateId", "kandidaatId", "applicantId")
FAVORITE_GENERIC_TARGET_KEYS = ("targetId", "favoriteId", "refId")
FAVORITE_KIND_KEYS = ("targetType", "type", "kind")
FAVORITE_JOB_SNAPSHOT_KEY = "job"
FAVORITE_CANDIDATE_SNAPSHOT_KEY = "candidate"
