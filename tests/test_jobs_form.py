import pytest

from job_portal.errors import ValidationError
from job_portal.jobs_form import JobForm


def _form(**overrides):
    data = {
        'title': 'Backend Engineer', 'description': 'Build APIs', 'type': 'full-time',
        'requirements': 'python, flask', 'experience_min': '2', 'experience_max': '5',
        'country': 'IN', 'state': 'Karnataka', 'city': 'Bengaluru',
    }
    data.update(overrides)
    return JobForm.from_form(data)


def test_payload_builds_location_and_experience():
    form = _form()
    form.validate()
    body = form.payload()
    assert body['location'] == 'Bengaluru, Karnataka, IN'
    assert body['experience'] == {'min': 2, 'max': 5}
    assert body['requirements'] == ['python', 'flask']
    assert 'salary' not in body


def test_explicit_location_is_kept():
    assert _form(location='Remote').payload()['location'] == 'Remote'


def test_inverted_experience_range_is_rejected():
    with pytest.raises(ValidationError) as exc:
        _form(experience_min='6', experience_max='2').validate()
    assert 'experience_max' in exc.value.fields


def test_required_fields():
    with pytest.raises(ValidationError) as exc:
        _form(title='', type='remote', country='', experience_min='x').validate()
    assert {'title', 'type', 'country', 'experience_min'} <= set(exc.value.fields)


def test_salary_must_be_numeric():
    with pytest.raises(ValidationError) as exc:
        _form(salary='lots').validate()
    assert set(exc.value.fields) == {'salary'}
