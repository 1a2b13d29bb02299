import json
import re
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Tuple

from .errors import ValidationError
from .models import (
    ROLE_RECRUITER,
    ROLE_USER,
    Education,
    JobSeekerProfile,
    Profile,
    RecruiterProfile,
    WorkExperience,
)


@dataclass
class Completion:
    percent: float
    missing: List[str]


def profile_completion(profile: Profile) -> Completion:
    checks: List[Tuple[object, str]] = [
        (profile.name, 'Name'),
        (profile.email, 'Email'),
        (profile.image, 'Profile Image'),
    ]
    if isinstance(profile, RecruiterProfile):
        checks += [
            (profile.company_name, 'Company Name'),
            (profile.company_description, 'Company Description'),
            (profile.company_address, 'Company Address'),
            (profile.website, 'Company Website'),
            (profile.industry, 'Company Industry'),
        ]
    else:
        checks += [
            (profile.address, 'Address'),
            (profile.education, 'Education Details'),
            (profile.skills, 'Skills'),
            (profile.experience, 'Experience Details'),
        ]
    missing = [label for value, label in checks if not value]
    done = len(checks) - len(missing)
    return Completion(percent=done / len(checks) * 100, missing=missing)


_ROW_KEY = re.compile(r'^(education|experience)-(\d+)-(\w+)$')


def _rows(form: Mapping[str, str], prefix: str) -> List[Dict[str, str]]:
    """Collect ``prefix-<i>-<field>`` inputs into rows ordered by index."""
    rows: Dict[int, Dict[str, str]] = {}
    for key in form.keys():
        m = _ROW_KEY.match(key)
        if not m or m.group(1) != prefix:
            continue
        rows.setdefault(int(m.group(2)), {})[m.group(3)] = (form.get(key) or '').strip()
    return [rows[i] for i in sorted(rows)]


@dataclass
class ProfileForm:
    role: str = ROLE_USER
    name: str = ''
    address: str = ''
    skills: List[str] = field(default_factory=list)
    education: List[Education] = field(default_factory=list)
    experience: List[WorkExperience] = field(default_factory=list)
    company_name: str = ''
    company_description: str = ''
    company_address: str = ''
    website: str = ''
    industry: str = ''

    @classmethod
    def from_profile(cls, profile: Profile) -> 'ProfileForm':
        if isinstance(profile, RecruiterProfile):
            return cls(
                role=ROLE_RECRUITER,
                name=profile.name,
                company_name=profile.company_name,
                company_description=profile.company_description,
                company_address=profile.company_address,
                website=profile.website,
                industry=profile.industry,
            )
        return cls(
            role=ROLE_USER,
            name=profile.name,
            address=profile.address,
            skills=list(profile.skills),
            education=list(profile.education),
            experience=list(profile.experience),
        )

    @classmethod
    def from_form(cls, role: str, form: Mapping[str, str]) -> 'ProfileForm':
        def get(key: str) -> str:
            return (form.get(key) or '').strip()

        if role == ROLE_RECRUITER:
            return cls(
                role=role,
                name=get('name'),
                company_name=get('companyName'),
                company_description=get('companyDescription'),
                company_address=get('companyAddress'),
                website=get('website'),
                industry=get('industry'),
            )
        education = [Education(institution=r.get('institution', ''), degree=r.get('degree', ''), year=r.get('year', ''))
                     for r in _rows(form, 'education')]
        experience = [WorkExperience(company=r.get('company', ''), position=r.get('position', ''),
                                     duration=r.get('duration', ''), description=r.get('description', ''))
                      for r in _rows(form, 'experience')]
        return cls(
            role=ROLE_USER,
            name=get('name'),
            address=get('address'),
            skills=[s.strip() for s in get('skills').split(',') if s.strip()],
            # rows left completely blank are dropped rather than flagged
            education=[e for e in education if any(e.to_dict().values())],
            experience=[e for e in experience if any(e.to_dict().values())],
        )

    def validate(self):
        errors: Dict[str, str] = {}
        if not self.name:
            errors['name'] = 'Name is required'
        if self.role == ROLE_RECRUITER:
            if not self.company_name:
                errors['companyName'] = 'Company name is required'
            if not self.company_address:
                errors['companyAddress'] = 'Company address is required'
            if not self.industry:
                errors['industry'] = 'Industry is required'
        else:
            if not self.address:
                errors['address'] = 'Address is required'
            for i, edu in enumerate(self.education):
                if not edu.institution:
                    errors[f'education-{i}-institution'] = 'College name is required'
                if not edu.degree:
                    errors[f'education-{i}-degree'] = 'Degree is required'
                if not edu.year:
                    errors[f'education-{i}-year'] = 'Graduation year is required'
            for i, exp in enumerate(self.experience):
                if not exp.company:
                    errors[f'experience-{i}-company'] = 'Company name is required'
                if not exp.position:
                    errors[f'experience-{i}-position'] = 'Position is required'
                if not exp.duration:
                    errors[f'experience-{i}-duration'] = 'Duration is required'
        if errors:
            raise ValidationError('Please fill in all required fields.', errors)

    def multipart_fields(self) -> Dict[str, str]:
        if self.role == ROLE_RECRUITER:
            return {
                'name': self.name,
                'companyName': self.company_name,
                'companyDescription': self.company_description,
                'companyAddress': self.company_address,
                'website': self.website,
                'industry': self.industry,
            }
        return {
            'name': self.name,
            'address': self.address,
            'education': json.dumps([e.to_dict() for e in self.education]),
            'skills': json.dumps(self.skills),
            'experience': json.dumps([e.to_dict() for e in self.experience]),
        }

    def apply_to(self, profile: Profile) -> Profile:
        """Profile as it will read after a successful save; the image is kept from before."""
        if self.role == ROLE_RECRUITER:
            return RecruiterProfile(
                id=profile.id, name=self.name, email=profile.email, image=profile.image,
                company_name=self.company_name, company_description=self.company_description,
                company_address=self.company_address, website=self.website, industry=self.industry,
            )
        return JobSeekerProfile(
            id=profile.id, name=self.name, email=profile.email, image=profile.image,
            address=self.address, skills=list(self.skills),
            education=list(self.education), experience=list(self.experience),
        )
