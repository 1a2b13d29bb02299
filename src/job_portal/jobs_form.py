from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from .errors import ValidationError
from .models import JobType


def _years(raw: str) -> Optional[int]:
    try:
        return int(raw)
    except (TypeError, ValueError):
        return None


@dataclass
class JobForm:
    title: str = ''
    description: str = ''
    location: str = ''
    requirements: List[str] = field(default_factory=list)
    type: str = ''
    experience_min: str = ''
    experience_max: str = ''
    salary: str = ''
    country: str = ''
    state: str = ''
    city: str = ''

    @classmethod
    def from_form(cls, form: Mapping[str, str]) -> 'JobForm':
        def get(key: str) -> str:
            return (form.get(key) or '').strip()

        return cls(
            title=get('title'),
            description=get('description'),
            location=get('location'),
            requirements=[r.strip() for r in get('requirements').split(',') if r.strip()],
            type=get('type'),
            experience_min=get('experience_min'),
            experience_max=get('experience_max'),
            salary=get('salary'),
            country=get('country'),
            state=get('state'),
            city=get('city'),
        )

    def validate(self):
        errors: Dict[str, str] = {}
        if not self.title:
            errors['title'] = 'Title is required'
        if not self.description:
            errors['description'] = 'Description is required'
        if self.type not in [t.value for t in JobType]:
            errors['type'] = 'Choose a job type'
        if not self.country:
            errors['country'] = 'Country is required'
        lo, hi = _years(self.experience_min), _years(self.experience_max)
        if lo is None or lo < 0:
            errors['experience_min'] = 'Minimum experience must be a whole number of years'
        if hi is None or hi < 0:
            errors['experience_max'] = 'Maximum experience must be a whole number of years'
        if lo is not None and hi is not None and lo > hi:
            errors['experience_max'] = 'Maximum experience cannot be below the minimum'
        if self.salary and _years(self.salary) is None:
            errors['salary'] = 'Salary must be a number'
        if errors:
            raise ValidationError('Please fix the highlighted fields.', errors)

    def payload(self) -> Dict[str, Any]:
        location = self.location or ', '.join(p for p in (self.city, self.state, self.country) if p)
        body: Dict[str, Any] = {
            'title': self.title,
            'description': self.description,
            'location': location,
            'requirements': self.requirements,
            'type': self.type,
            'experience': {'min': _years(self.experience_min), 'max': _years(self.experience_max)},
            'country': self.country,
            'state': self.state,
            'city': self.city,
        }
        if self.salary:
            body['salary'] = self.salary
        return body
