import json

import pytest
from werkzeug.datastructures import MultiDict

from job_portal.errors import ValidationError
from job_portal.models import Education, JobSeekerProfile, RecruiterProfile
from job_portal.profile import ProfileForm, profile_completion


def test_seeker_completion_counts_missing_sections():
    p = JobSeekerProfile(name='Asha', email='asha@example.com', address='Pune', skills=['python'])
    c = profile_completion(p)
    assert c.missing == ['Profile Image', 'Education Details', 'Experience Details']
    assert round(c.percent) == 57


def test_recruiter_completion_full():
    p = RecruiterProfile(name='Ravi', email='r@acme.test', image='https://img', company_name='Acme',
                         company_description='Widgets', company_address='Bengaluru',
                         website='https://acme.test', industry='Software')
    c = profile_completion(p)
    assert c.percent == 100
    assert c.missing == []


def test_seeker_form_parses_rows_and_drops_blank_ones():
    form = MultiDict({
        'name': 'Asha', 'address': 'Pune', 'skills': 'python, , sql',
        'education-0-institution': 'IIT', 'education-0-degree': 'BTech', 'education-0-year': '2020',
        'education-1-institution': '', 'education-1-degree': '', 'education-1-year': '',
        'experience-0-company': 'Acme', 'experience-0-position': 'Dev', 'experience-0-duration': '2y',
    })
    pf = ProfileForm.from_form('user', form)
    assert pf.skills == ['python', 'sql']
    assert pf.education == [Education('IIT', 'BTech', '2020')]
    assert len(pf.experience) == 1
    pf.validate()
    fields = pf.multipart_fields()
    assert json.loads(fields['education']) == [{'collegeName': 'IIT', 'degree': 'BTech', 'graduationYear': '2020'}]
    assert json.loads(fields['skills']) == ['python', 'sql']


def test_incomplete_education_row_is_flagged_per_field():
    form = MultiDict({'name': 'Asha', 'address': 'Pune', 'education-0-institution': 'IIT'})
    pf = ProfileForm.from_form('user', form)
    with pytest.raises(ValidationError) as exc:
        pf.validate()
    assert exc.value.message == 'Please fill in all required fields.'
    assert set(exc.value.fields) == {'education-0-degree', 'education-0-year'}


def test_recruiter_form_requires_company_fields():
    pf = ProfileForm.from_form('recruiter', MultiDict({'name': 'Ravi', 'companyName': 'Acme'}))
    with pytest.raises(ValidationError) as exc:
        pf.validate()
    assert set(exc.value.fields) == {'companyAddress', 'industry'}


def test_apply_to_keeps_identity_and_image():
    before = RecruiterProfile(id='r1', name='Ravi', email='r@acme.test', image='https://img')
    pf = ProfileForm(role='recruiter', name='Ravi K', company_name='Acme', company_address='BLR', industry='IT')
    after = pf.apply_to(before)
    assert (after.id, after.email, after.image, after.name) == ('r1', 'r@acme.test', 'https://img', 'Ravi K')
    assert after.company_name == 'Acme'
