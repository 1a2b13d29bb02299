import atexit
from functools import wraps
from typing import Optional

from flask import (
    Blueprint,
    Flask,
    current_app,
    flash,
    g,
    jsonify,
    redirect,
    render_template_string,
    request,
    session,
    url_for,
)
from markupsafe import Markup
from werkzeug.datastructures import FileStorage
from werkzeug.exceptions import RequestEntityTooLarge
from werkzeug.utils import secure_filename

from .api_client import BackendClient, Upload
from .config import Settings, load_settings
from .errors import BackendError, PortalError, ValidationError
from .facets import (
    FilterState,
    city_options,
    country_options,
    filter_jobs,
    state_options,
    type_options,
)
from .geo import GeoDirectory
from .jobs_form import JobForm
from .log import get_logger, set_level
from .models import ROLE_RECRUITER, ROLE_USER, ROLES, Education, JobType, WorkExperience
from .password_reset import ForgotPasswordFlow
from .profile import ProfileForm, profile_completion
from .resource import Failed, Loaded, load
from .resumes import validate_resume
from .session import ClientFactory, SessionStore
from .templates import (
    APPLICANT_HTML,
    APPLICANTS_HTML,
    APPLY_HTML,
    INDEX_HTML,
    JOB_HTML,
    JOBS_HTML,
    LAYOUT_HTML,
    LOGIN_HTML,
    POST_JOB_HTML,
    PROFILE_EDIT_HTML,
    PROFILE_HTML,
    SIGNUP_HTML,
)

log = get_logger(__name__)

portal = Blueprint('portal', __name__)
geo_bp = Blueprint('geo', __name__, url_prefix='/geo')

RESET_KEY = 'forgot_password'
CLIENT_FACTORY_EXT = 'job_portal.client_factory'
GEO_EXT = 'job_portal.geo'
_NO_BOOTSTRAP = {'portal.healthz', 'static'}


def _render(template: str, title: str, status: int = 200, **ctx):
    body = render_template_string(template, **ctx)
    return render_template_string(LAYOUT_HTML, title=title, body=Markup(body)), status


def _safe_next(target: Optional[str]) -> Optional[str]:
    if target and target.startswith('/') and not target.startswith('//'):
        return target
    return None


def _geo() -> GeoDirectory:
    return current_app.extensions[GEO_EXT]


def login_required(role: Optional[str] = None):
    """Send anonymous visitors (or the wrong role) to the login page."""
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            auth: SessionStore = g.auth
            if not auth.loading and auth.user is None:
                return redirect(url_for('portal.login', next=request.path))
            if role and auth.role != role:
                flash('You do not have access to that page.', 'error')
                return redirect(url_for('portal.login'))
            return fn(*args, **kwargs)
        return wrapper
    return decorator


@portal.before_app_request
def open_session():
    g.auth = SessionStore(session, current_app.extensions[CLIENT_FACTORY_EXT])
    if request.endpoint not in _NO_BOOTSTRAP:
        g.auth.bootstrap()


@portal.teardown_app_request
def close_session(exc):
    auth = g.pop('auth', None)
    if auth is not None:
        auth.close()


@portal.app_errorhandler(RequestEntityTooLarge)
def too_large(e):
    flash('The uploaded file is too large.', 'error')
    return redirect(request.path)


# --- auth ---

@portal.route('/')
def index():
    return _render(INDEX_HTML, 'Home')


@portal.route('/login', methods=['GET', 'POST'])
def login():
    reset = ForgotPasswordFlow.from_dict(session.get(RESET_KEY))
    next_url = _safe_next(request.values.get('next')) or ''
    if request.method == 'GET':
        if g.auth.user is not None:
            return redirect(url_for('portal.jobs'))
        return _render(LOGIN_HTML, 'Login', form={'email': '', 'role': ROLE_USER}, reset=reset, next_url=next_url)

    form = {k: (request.form.get(k) or '').strip() for k in ('email', 'password', 'role')}
    if not form['email'] or not form['password']:
        flash('Email and password are required.', 'error')
        return _render(LOGIN_HTML, 'Login', 400, form=form, reset=reset, next_url=next_url)
    if form['role'] not in ROLES:
        flash('Choose whether you are a job seeker or a recruiter.', 'error')
        return _render(LOGIN_HTML, 'Login', 400, form=form, reset=reset, next_url=next_url)
    try:
        token = g.auth.client.login(form['email'], form['password'], form['role'])
        g.auth.login(token, form['role'])
    except PortalError as e:
        flash(e.message, 'error')
        return _render(LOGIN_HTML, 'Login', 400, form=form, reset=reset, next_url=next_url)
    if g.auth.user is None:
        flash('Logged in, but your profile could not be loaded. Please try again.', 'error')
        return _render(LOGIN_HTML, 'Login', 502, form=form, reset=reset, next_url=next_url)

    session.permanent = True
    log.info('Login succeeded for a %s account', form['role'])
    flash('Logged in successfully!', 'success')
    return redirect(next_url or url_for('portal.jobs'))


@portal.route('/signup', methods=['GET', 'POST'])
def signup():
    if request.method == 'GET':
        return _render(SIGNUP_HTML, 'Sign up', form={'role': ROLE_USER}, errors={})

    form = {k: (request.form.get(k) or '').strip()
            for k in ('name', 'email', 'password', 'confirm_password', 'role')}
    errors = {}
    if not form['name']:
        errors['name'] = 'Name is required'
    if not form['email']:
        errors['email'] = 'Email is required'
    if not form['password'] or form['password'] != form['confirm_password']:
        errors['confirm_password'] = 'Passwords do not match'
    if form['role'] not in ROLES:
        form['role'] = ROLE_USER
    if errors:
        flash('Please fix the highlighted fields.', 'error')
        return _render(SIGNUP_HTML, 'Sign up', 400, form=form, errors=errors)
    try:
        message = g.auth.client.signup(form['name'], form['email'], form['password'], form['role'])
    except PortalError as e:
        flash(e.message, 'error')
        return _render(SIGNUP_HTML, 'Sign up', 400, form=form, errors={})
    flash(f'{message}. Please log in.', 'success')
    return redirect(url_for('portal.login'))


@portal.route('/logout', methods=['POST'])
def logout():
    g.auth.logout()
    flash('Logged out.', 'success')
    return redirect(url_for('portal.login'))


def _save_reset(flow: ForgotPasswordFlow):
    if flow.is_open:
        session[RESET_KEY] = flow.to_dict()
    else:
        session.pop(RESET_KEY, None)


@portal.route('/forgot-password')
def forgot_password_page():
    flow = ForgotPasswordFlow.from_dict(session.get(RESET_KEY))
    if not flow.is_open:
        flow.open()
    _save_reset(flow)
    return redirect(url_for('portal.login'))


@portal.route('/forgot-password/<action>', methods=['POST'])
def forgot_password(action: str):
    flow = ForgotPasswordFlow.from_dict(session.get(RESET_KEY))
    f = request.form
    try:
        if action == 'open':
            flow.open()
        elif action == 'request-otp':
            flash(flow.request_otp(g.auth.client, f.get('email', ''), f.get('role', ROLE_USER)), 'success')
        elif action == 'back':
            flow.back()
        elif action == 'reset':
            message = flow.submit_reset(g.auth.client, f.get('otp', ''), f.get('new_password', ''),
                                        f.get('confirm_password', ''))
            flash(f'{message}. Please log in with your new password.', 'success')
        elif action == 'cancel':
            flow.cancel()
        else:
            flash('Unknown password reset action.', 'error')
    except PortalError as e:
        log.warning('Password reset %s failed: %s', action, e.message)
        flash(e.message, 'error')
    _save_reset(flow)
    return redirect(url_for('portal.login'))


# --- jobs ---

@portal.route('/jobs')
@login_required()
def jobs():
    filters = FilterState.from_args(request.args)
    result = load(g.auth.client.list_jobs, **filters.backend_params())
    visible = []
    options = {'countries': [], 'states': [], 'cities': [], 'types': []}
    if isinstance(result, Loaded):
        filters.reconcile(result.value)
        visible = filter_jobs(result.value, filters)
        options = {
            'countries': country_options(result.value),
            'states': state_options(result.value, filters.country),
            'cities': city_options(result.value, filters.country, filters.state),
            'types': type_options(result.value),
        }
    return _render(JOBS_HTML, 'Jobs', jobs=result, visible=visible, filters=filters, options=options,
                   filtered=not filters.is_empty(), current_url=url_for('portal.jobs', **filters.to_args()))


@portal.route('/jobs/<job_id>/delete', methods=['POST'])
@login_required(ROLE_RECRUITER)
def delete_job(job_id: str):
    try:
        g.auth.client.delete_job(job_id)
        flash('Job deleted successfully', 'success')
    except PortalError as e:
        flash(e.message, 'error')
    return redirect(_safe_next(request.form.get('next')) or url_for('portal.jobs'))


@portal.route('/jobs/<job_id>')
@login_required()
def job_detail(job_id: str):
    result = load(g.auth.client.get_job, job_id)
    return _render(JOB_HTML, 'Job', 404 if isinstance(result, Failed) else 200, job=result)


def _apply_page(job_id: str, status: int = 200, errors=None):
    client = g.auth.client
    return _render(APPLY_HTML, 'Apply', status, job_id=job_id, job=load(client.get_job, job_id),
                   resumes=load(client.list_resumes), errors=errors or {})


@portal.route('/jobs/<job_id>/apply', methods=['GET', 'POST'])
@login_required(ROLE_USER)
def apply(job_id: str):
    if request.method == 'GET':
        return _apply_page(job_id)

    resume_url = (request.form.get('resume_url') or '').strip()
    try:
        if resume_url:
            message = g.auth.client.apply(job_id, resume_url=resume_url)
        else:
            message = g.auth.client.apply(job_id, resume_file=validate_resume(request.files.get('resume')))
    except ValidationError as e:
        flash(e.message, 'error')
        return _apply_page(job_id, 400, e.fields)
    except BackendError as e:
        if 'missing information' in e.message.lower():
            flash('Please complete your profile before applying.', 'error')
            return redirect(url_for('portal.profile'))
        flash(e.message, 'error')
        return _apply_page(job_id, 400)
    except PortalError as e:
        flash(e.message, 'error')
        return _apply_page(job_id, 502)
    flash(message, 'success')
    return redirect(url_for('portal.jobs'))


@portal.route('/resumes/<resume_id>/delete', methods=['POST'])
@login_required(ROLE_USER)
def delete_resume(resume_id: str):
    try:
        g.auth.client.delete_resume(resume_id)
        flash('Resume deleted', 'success')
    except PortalError as e:
        flash(e.message, 'error')
    return redirect(_safe_next(request.form.get('next')) or url_for('portal.jobs'))


@portal.route('/jobs/<job_id>/applicants')
@login_required(ROLE_RECRUITER)
def applicants(job_id: str):
    client = g.auth.client
    return _render(APPLICANTS_HTML, 'Applicants', job_id=job_id, job=load(client.get_job, job_id),
                   applications=load(client.list_applicants, job_id))


@portal.route('/applicants/<user_id>')
@login_required(ROLE_RECRUITER)
def applicant_profile(user_id: str):
    result = load(g.auth.client.get_applicant, user_id)
    return _render(APPLICANT_HTML, 'Applicant', 404 if isinstance(result, Failed) else 200, profile=result)


def _post_job_page(form: JobForm, status: int = 200, errors=None):
    geo = _geo()
    countries = load(geo.countries)
    states = load(geo.states, form.country) if form.country else Loaded([])
    cities = load(geo.cities, form.country, form.state) if form.country and form.state else Loaded([])
    failed = next((r for r in (countries, states, cities) if isinstance(r, Failed)), None)
    return _render(
        POST_JOB_HTML, 'Post Job', status,
        form=form,
        errors=errors or {},
        job_types=[t.value for t in JobType],
        countries=countries.value if isinstance(countries, Loaded) else [],
        states=states.value if isinstance(states, Loaded) else [],
        cities=cities.value if isinstance(cities, Loaded) else [],
        geo_error=failed.message if failed else '',
    )


@portal.route('/post-job', methods=['GET', 'POST'])
@login_required(ROLE_RECRUITER)
def post_job():
    if request.method == 'GET':
        return _post_job_page(JobForm())

    form = JobForm.from_form(request.form)
    try:
        form.validate()
        g.auth.client.create_job(form.payload())
    except ValidationError as e:
        flash(e.message, 'error')
        return _post_job_page(form, 400, e.fields)
    except PortalError as e:
        flash(e.message, 'error')
        return _post_job_page(form, 502)
    log.info('Job posted: %s', form.title)
    flash('Job posted successfully!', 'success')
    return redirect(url_for('portal.jobs'))


# --- profile ---

@portal.route('/profile')
@login_required()
def profile():
    result = load(g.auth.client.get_profile, role=g.auth.role)
    completion = None
    if isinstance(result, Loaded):
        g.auth.update_user(result.value)
        completion = profile_completion(result.value)
    return _render(PROFILE_HTML, 'Profile', profile=result, completion=completion)


def _profile_image(file: Optional[FileStorage]) -> Optional[Upload]:
    if file is None or not file.filename:
        return None
    if not (file.mimetype or '').startswith('image/'):
        raise ValidationError('Profile image must be an image file', {'profileImage': 'Choose an image file'})
    return secure_filename(file.filename) or 'profile-image', file.stream, file.mimetype


def _edit_page(form: ProfileForm, status: int = 200, errors=None):
    recruiter_values = {
        'companyName': form.company_name,
        'companyAddress': form.company_address,
        'website': form.website,
        'industry': form.industry,
    }
    return _render(PROFILE_EDIT_HTML, 'Edit profile', status, form=form, errors=errors or {},
                   recruiter_values=recruiter_values)


def _edit_rows(form: ProfileForm, intent: str) -> bool:
    """Apply an add/remove row button; False when the intent is not a row edit."""
    if intent == 'add-education':
        form.education.append(Education())
    elif intent == 'add-experience':
        form.experience.append(WorkExperience())
    elif intent.startswith('remove-education-') or intent.startswith('remove-experience-'):
        rows = form.education if intent.startswith('remove-education-') else form.experience
        idx = intent.rsplit('-', 1)[-1]
        if idx.isdigit() and int(idx) < len(rows):
            rows.pop(int(idx))
    else:
        return False
    return True


@portal.route('/profile/edit', methods=['GET', 'POST'])
@login_required()
def edit_profile():
    auth: SessionStore = g.auth
    if request.method == 'GET':
        return _edit_page(ProfileForm.from_profile(auth.user))

    form = ProfileForm.from_form(auth.role, request.form)
    intent = request.form.get('intent', 'save')
    if _edit_rows(form, intent):
        return _edit_page(form)
    try:
        form.validate()
        image = _profile_image(request.files.get('profileImage'))
        message = auth.client.update_profile(form.multipart_fields(), image)
    except ValidationError as e:
        flash(e.message, 'error')
        return _edit_page(form, 400, e.fields)
    except PortalError as e:
        flash(e.message, 'error')
        return _edit_page(form, 502)

    try:
        auth.update_user(auth.client.get_profile(role=auth.role))
    except PortalError as e:
        log.warning('Profile saved but refetch failed: %s', e.message)
        auth.update_user(form.apply_to(auth.user))
    flash(message, 'success')
    return redirect(url_for('portal.profile'))


@portal.route('/healthz')
def healthz():
    return jsonify({'ok': True})


# --- geo lookups ---

def _geo_json(fn, *args):
    if g.auth.user is None:
        return jsonify({'ok': False, 'error': 'Login required'}), 401
    result = load(fn, *args)
    if isinstance(result, Failed):
        return jsonify({'ok': False, 'error': result.message}), 502
    return jsonify({'ok': True, 'items': result.value})


@geo_bp.route('/countries')
def countries():
    return _geo_json(_geo().countries)


@geo_bp.route('/states')
def states():
    return _geo_json(_geo().states, request.args.get('country', ''))


@geo_bp.route('/cities')
def cities():
    return _geo_json(_geo().cities, request.args.get('country', ''), request.args.get('state', ''))


def create_app(settings: Optional[Settings] = None, client_factory: Optional[ClientFactory] = None,
               geo: Optional[GeoDirectory] = None) -> Flask:
    settings = settings or load_settings()

    if client_factory is None:
        def client_factory(token: Optional[str]) -> BackendClient:
            return BackendClient(settings.api_base_url, token=token, timeout=settings.request_timeout)

    if geo is None:
        geo = GeoDirectory(settings.countries_url, settings.geonames_url, settings.geonames_username,
                           timeout=settings.request_timeout)
        atexit.register(geo.close)

    set_level(settings.log_level)

    app = Flask(__name__)
    app.secret_key = settings.secret_key
    app.config['MAX_CONTENT_LENGTH'] = settings.max_content_length
    app.config['SESSION_COOKIE_HTTPONLY'] = True
    app.config['SESSION_COOKIE_SAMESITE'] = 'Lax'
    app.extensions[CLIENT_FACTORY_EXT] = client_factory
    app.extensions[GEO_EXT] = geo
    app.register_blueprint(portal)
    app.register_blueprint(geo_bp)
    log.info('Job portal app created (backend %s)', settings.api_base_url)
    return app
