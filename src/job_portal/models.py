from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Union

ROLE_USER = 'user'
ROLE_RECRUITER = 'recruiter'
ROLES = (ROLE_USER, ROLE_RECRUITER)


class JobType(str, Enum):
    FULL_TIME = 'full-time'
    PART_TIME = 'part-time'
    CONTRACT = 'contract'
    INTERNSHIP = 'internship'


class JobStatus(str, Enum):
    OPEN = 'open'
    CLOSED = 'closed'


class ApplicationStatus(str, Enum):
    PENDING = 'pending'
    ACCEPTED = 'accepted'
    REJECTED = 'rejected'


def _id(data: Dict[str, Any]) -> str:
    return str(data.get('_id') or data.get('id') or '')


def _str(value: Any) -> str:
    return '' if value is None else str(value).strip()


def _int(value: Any) -> Optional[int]:
    if value is None or value == '':
        return None
    try:
        return int(float(value))
    except (TypeError, ValueError):
        return None


def _enum(kind, value: Any, default=None):
    raw = _str(value).lower()
    if not raw:
        return default
    try:
        return kind(raw)
    except ValueError:
        # keep values the backend invents rather than dropping them
        return raw


def _str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [s.strip() for s in value.split(',') if s.strip()]
    return [_str(v) for v in value if _str(v)]


def _value(v: Any) -> Any:
    return v.value if isinstance(v, Enum) else v


@dataclass
class ExperienceRange:
    min: Optional[int] = None
    max: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Any) -> 'ExperienceRange':
        if not isinstance(data, dict):
            return cls()
        return cls(min=_int(data.get('min')), max=_int(data.get('max')))

    def to_dict(self) -> Dict[str, Any]:
        return {'min': self.min, 'max': self.max}

    def label(self) -> str:
        if self.min is None and self.max is None:
            return ''
        if self.max is None:
            return f'{self.min}+ years'
        return f'{self.min or 0}-{self.max} years'


@dataclass
class SalaryRange:
    min: Optional[int] = None
    max: Optional[int] = None
    currency: str = ''

    @classmethod
    def from_value(cls, data: Any) -> Optional['SalaryRange']:
        if data is None or data == '':
            return None
        if isinstance(data, dict):
            return cls(min=_int(data.get('min')), max=_int(data.get('max')), currency=_str(data.get('currency')))
        # free-text salary such as "50000" or "40000-60000"
        parts = [p for p in str(data).replace(' ', '').split('-') if p]
        if len(parts) == 2:
            return cls(min=_int(parts[0]), max=_int(parts[1]))
        return cls(min=_int(parts[0]) if parts else None)

    def to_dict(self) -> Dict[str, Any]:
        return {'min': self.min, 'max': self.max, 'currency': self.currency}

    def label(self) -> str:
        cur = f'{self.currency} ' if self.currency else ''
        if self.min is not None and self.max is not None:
            return f'{cur}{self.min:,} - {self.max:,}'
        if self.min is not None:
            return f'{cur}{self.min:,}'
        return ''


@dataclass
class CompanyProfile:
    name: str = ''
    industry: str = ''


@dataclass
class Company:
    id: str = ''
    name: str = ''
    profile: Optional[CompanyProfile] = None

    @classmethod
    def from_value(cls, data: Any) -> 'Company':
        if isinstance(data, str):
            return cls(name=data.strip())
        if not isinstance(data, dict):
            return cls()
        nested = data.get('company')
        profile = None
        if isinstance(nested, dict):
            profile = CompanyProfile(name=_str(nested.get('name')), industry=_str(nested.get('industry')))
        return cls(id=_id(data), name=_str(data.get('name')), profile=profile)

    @property
    def display_name(self) -> str:
        if self.profile and self.profile.name:
            return self.profile.name
        return self.name


@dataclass
class JobPosting:
    id: str
    title: str
    description: str = ''
    company: Company = field(default_factory=Company)
    location: str = ''
    country: str = ''
    state: str = ''
    city: str = ''
    requirements: List[str] = field(default_factory=list)
    type: Union[JobType, str, None] = None
    experience: ExperienceRange = field(default_factory=ExperienceRange)
    salary: Optional[SalaryRange] = None
    status: Union[JobStatus, str, None] = None
    created_at: str = ''
    updated_at: str = ''

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'JobPosting':
        return cls(
            id=_id(data),
            title=_str(data.get('title')),
            description=_str(data.get('description')),
            company=Company.from_value(data.get('company') or data.get('postedBy')),
            location=_str(data.get('location')),
            country=_str(data.get('country')),
            state=_str(data.get('state')),
            city=_str(data.get('city')),
            requirements=_str_list(data.get('requirements')),
            type=_enum(JobType, data.get('type')),
            experience=ExperienceRange.from_dict(data.get('experience')),
            salary=SalaryRange.from_value(data.get('salary')),
            status=_enum(JobStatus, data.get('status')),
            created_at=_str(data.get('createdAt')),
            updated_at=_str(data.get('updatedAt')),
        )

    @property
    def type_value(self) -> str:
        return _str(_value(self.type))

    @property
    def status_value(self) -> str:
        return _str(_value(self.status))

    @property
    def is_open(self) -> bool:
        return self.status_value in ('', JobStatus.OPEN.value)

    @property
    def place(self) -> str:
        """Location text, falling back to the decomposed city/state/country."""
        parts = [p for p in (self.city, self.state, self.country) if p]
        return self.location or ', '.join(parts)


@dataclass
class Education:
    institution: str = ''
    degree: str = ''
    year: str = ''

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Education':
        institution = data.get('collegeName') or data.get('schoolName') or data.get('institution') or data.get('school')
        year = data.get('graduationYear') or data.get('year') or data.get('endDate')
        return cls(institution=_str(institution), degree=_str(data.get('degree')), year=_str(year))

    def to_dict(self) -> Dict[str, Any]:
        return {'collegeName': self.institution, 'degree': self.degree, 'graduationYear': self.year}


@dataclass
class WorkExperience:
    company: str = ''
    position: str = ''
    duration: str = ''
    description: str = ''

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'WorkExperience':
        return cls(
            company=_str(data.get('company')),
            position=_str(data.get('position')),
            duration=_str(data.get('duration')),
            description=_str(data.get('description')),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'company': self.company,
            'position': self.position,
            'duration': self.duration,
            'description': self.description,
        }


@dataclass
class JobSeekerProfile:
    id: str = ''
    name: str = ''
    email: str = ''
    image: str = ''
    address: str = ''
    skills: List[str] = field(default_factory=list)
    education: List[Education] = field(default_factory=list)
    experience: List[WorkExperience] = field(default_factory=list)
    role: str = ROLE_USER

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'JobSeekerProfile':
        details = data.get('profile') or {}
        return cls(
            id=_id(data),
            name=_str(data.get('name')),
            email=_str(data.get('email')),
            image=_str(data.get('profileImage')),
            address=_str(details.get('address')),
            skills=_str_list(details.get('skills')),
            education=[Education.from_dict(e) for e in details.get('education') or [] if isinstance(e, dict)],
            experience=[WorkExperience.from_dict(e) for e in details.get('experience') or [] if isinstance(e, dict)],
        )


@dataclass
class RecruiterProfile:
    id: str = ''
    name: str = ''
    email: str = ''
    image: str = ''
    company_name: str = ''
    company_description: str = ''
    company_address: str = ''
    website: str = ''
    industry: str = ''
    role: str = ROLE_RECRUITER

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'RecruiterProfile':
        company = data.get('company') or {}
        return cls(
            id=_id(data),
            name=_str(data.get('name')),
            email=_str(data.get('email')),
            image=_str(data.get('profileImage')),
            company_name=_str(company.get('name')),
            company_description=_str(company.get('description')),
            company_address=_str(company.get('address')),
            website=_str(company.get('website')),
            industry=_str(company.get('industry')),
        )


Profile = Union[JobSeekerProfile, RecruiterProfile]


def parse_profile(data: Dict[str, Any], role: Optional[str] = None) -> Profile:
    """Build the role-specific profile; the record's own role wins over the hint."""
    kind = _str(data.get('role')) or role or ROLE_USER
    if kind == ROLE_RECRUITER:
        return RecruiterProfile.from_dict(data)
    return JobSeekerProfile.from_dict(data)


@dataclass
class Application:
    id: str
    job_id: str = ''
    applicant: JobSeekerProfile = field(default_factory=JobSeekerProfile)
    resume: str = ''
    status: Union[ApplicationStatus, str, None] = ApplicationStatus.PENDING
    created_at: str = ''
    updated_at: str = ''

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Application':
        job = data.get('job')
        job_id = _id(job) if isinstance(job, dict) else _str(job)
        applicant = data.get('applicant')
        return cls(
            id=_id(data),
            job_id=job_id,
            applicant=JobSeekerProfile.from_dict(applicant) if isinstance(applicant, dict) else JobSeekerProfile(id=_str(applicant)),
            resume=_str(data.get('resume')),
            status=_enum(ApplicationStatus, data.get('status'), ApplicationStatus.PENDING),
            created_at=_str(data.get('createdAt')),
            updated_at=_str(data.get('updatedAt')),
        )

    @property
    def status_value(self) -> str:
        return _str(_value(self.status))


@dataclass
class SavedResume:
    id: str
    url: str = ''
    name: str = ''
    created_at: str = ''

    @classmethod
    def from_value(cls, data: Any) -> 'SavedResume':
        if isinstance(data, str):
            return cls(id='', url=data, name=data.rsplit('/', 1)[-1])
        url = _str(data.get('url') or data.get('resumeUrl') or data.get('resume'))
        name = _str(data.get('name') or data.get('fileName')) or url.rsplit('/', 1)[-1]
        return cls(id=_id(data), url=url, name=name, created_at=_str(data.get('createdAt')))
