"""Client-side faceting of an already-loaded job list.

Every predicate is independent and ANDed; the free-text term alone is an OR
across the job's name-like fields. No indexing: the list is scanned each time.
"""
from dataclasses import asdict, dataclass
from typing import Dict, Iterable, List, Mapping, Optional

from .models import JobPosting

UNSET = ('', 'all')


def _unset(value: Optional[str]) -> bool:
    return value is None or value.strip().lower() in UNSET


def _parse_years(raw: Optional[str]) -> Optional[int]:
    if raw is None or str(raw).strip() == '':
        return None
    try:
        return max(0, int(float(raw)))
    except (ValueError, OverflowError):
        return None


@dataclass
class FilterState:
    search: str = ''
    country: str = ''
    state: str = ''
    city: str = ''
    type: str = ''
    experience_min: Optional[int] = None
    experience_max: Optional[int] = None
    # sent to the backend rather than matched locally
    location: str = ''
    requirements: str = ''

    @classmethod
    def from_args(cls, args: Mapping[str, str]) -> 'FilterState':
        """Parse query args; ``prev_country``/``prev_state`` carry the selection the form was rendered with."""
        f = cls(
            search=(args.get('q') or '').strip(),
            country=(args.get('country') or '').strip(),
            state=(args.get('state') or '').strip(),
            city=(args.get('city') or '').strip(),
            type=(args.get('type') or '').strip(),
            experience_min=_parse_years(args.get('experience_min')),
            experience_max=_parse_years(args.get('experience_max')),
            location=(args.get('location') or '').strip(),
            requirements=(args.get('requirements') or '').strip(),
        )
        if 'prev_country' in args and args.get('prev_country', '') != f.country:
            f.select_country(f.country)
        elif 'prev_state' in args and args.get('prev_state', '') != f.state:
            f.select_state(f.state)
        return f

    def select_country(self, value: str):
        self.country = value
        self.state = ''
        self.city = ''

    def select_state(self, value: str):
        self.state = value
        self.city = ''

    def select_city(self, value: str):
        self.city = value

    def reconcile(self, jobs: Iterable[JobPosting]):
        """Drop a state/city that no longer belongs to the selected parent."""
        jobs = list(jobs)
        if not _unset(self.state) and self.state not in state_options(jobs, self.country):
            self.select_state('')
        if not _unset(self.city) and self.city not in city_options(jobs, self.country, self.state):
            self.city = ''

    def is_empty(self) -> bool:
        return self == FilterState()

    def backend_params(self) -> Dict[str, str]:
        params = {
            'location': self.location,
            'type': '' if _unset(self.type) else self.type,
            'experience': '' if self.experience_min is None else str(self.experience_min),
            'requirements': self.requirements,
        }
        return {k: v for k, v in params.items() if v}

    def to_args(self) -> Dict[str, str]:
        out = {}
        for k, v in asdict(self).items():
            if v is None or v == '':
                continue
            out['q' if k == 'search' else k] = str(v)
        return out


def _search_fields(job: JobPosting) -> List[str]:
    return [job.title, job.company.name, job.company.display_name, job.location, job.country, job.state, job.city]


def matches_search(job: JobPosting, term: str) -> bool:
    term = (term or '').strip().lower()
    if not term:
        return True
    return any(term in (value or '').lower() for value in _search_fields(job))


def matches_experience(job: JobPosting, lo: Optional[int], hi: Optional[int]) -> bool:
    if lo is not None:
        job_min = job.experience.min if job.experience.min is not None else 0
        if job_min < lo:
            return False
    if hi is not None:
        # an open-ended posting cannot fit under a ceiling
        if job.experience.max is None or job.experience.max > hi:
            return False
    return True


def matches(job: JobPosting, filters: FilterState) -> bool:
    if not matches_search(job, filters.search):
        return False
    exact = (
        (filters.country, job.country),
        (filters.state, job.state),
        (filters.city, job.city),
        (filters.type, job.type_value),
    )
    for wanted, actual in exact:
        if not _unset(wanted) and wanted != actual:
            return False
    return matches_experience(job, filters.experience_min, filters.experience_max)


def filter_jobs(jobs: Iterable[JobPosting], filters: FilterState) -> List[JobPosting]:
    return [j for j in jobs if matches(j, filters)]


def _distinct(values: Iterable[str]) -> List[str]:
    return sorted({v for v in values if v})


def country_options(jobs: Iterable[JobPosting]) -> List[str]:
    return _distinct(j.country for j in jobs)


def state_options(jobs: Iterable[JobPosting], country: str) -> List[str]:
    if _unset(country):
        return []
    return _distinct(j.state for j in jobs if j.country == country)


def city_options(jobs: Iterable[JobPosting], country: str, state: str) -> List[str]:
    if _unset(country) or _unset(state):
        return []
    return _distinct(j.city for j in jobs if j.country == country and j.state == state)


def type_options(jobs: Iterable[JobPosting]) -> List[str]:
    return _distinct(j.type_value for j in jobs)
