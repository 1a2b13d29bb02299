LAYOUT_HTML = """
<!doctype html>
<html lang="en">
<head>
  <meta charset="utf-8" />
  <meta name="viewport" content="width=device-width, initial-scale=1" />
  <title>{{ title }} - Job Portal</title>
  <script src="https://cdn.tailwindcss.com"></script>
  <style>
    @keyframes fadeUp { from { opacity: 0; transform: translateY(12px) scale(.98); } to { opacity: 1; transform: none; } }
    @keyframes toastIn { from { opacity: 0; transform: translateX(24px); } to { opacity: 1; transform: none; } }
    .animate-in { animation: fadeUp .45s cubic-bezier(.2,.8,.2,1) both; }
    .toast { animation: toastIn .3s ease-out both; }
    .lift { transition: transform .2s, box-shadow .2s; }
    .lift:hover { transform: translateY(-4px) scale(1.01); box-shadow: 0 12px 24px rgba(15,23,42,.12); }
  </style>
</head>
<body class="bg-slate-50 text-slate-900 min-h-screen">
  <nav class="bg-white shadow-sm ring-1 ring-slate-200">
    <div class="max-w-6xl mx-auto px-6 py-3 flex items-center justify-between">
      <a href="{{ url_for('portal.index') }}" class="text-xl font-bold bg-gradient-to-r from-blue-600 to-purple-600 bg-clip-text text-transparent">JobPortal</a>
      <div class="flex items-center gap-4 text-sm">
        {% if g.auth and g.auth.user %}
          <a class="hover:text-blue-700" href="{{ url_for('portal.jobs') }}">Jobs</a>
          {% if g.auth.role == 'recruiter' %}
          <a class="hover:text-blue-700" href="{{ url_for('portal.post_job') }}">Post Job</a>
          {% endif %}
          <a class="hover:text-blue-700" href="{{ url_for('portal.profile') }}">{{ g.auth.user.name or 'Profile' }}</a>
          <form method="post" action="{{ url_for('portal.logout') }}">
            <button class="px-3 py-1 rounded border border-slate-300 hover:bg-slate-100">Logout</button>
          </form>
        {% else %}
          <a class="hover:text-blue-700" href="{{ url_for('portal.login') }}">Login</a>
          <a class="px-3 py-1 rounded bg-blue-600 text-white hover:bg-blue-700" href="{{ url_for('portal.signup') }}">Sign up</a>
        {% endif %}
      </div>
    </div>
  </nav>
  <div class="fixed top-4 right-4 space-y-2 z-50">
    {% for category, message in get_flashed_messages(with_categories=true) %}
    <div class="toast px-4 py-2 rounded shadow text-sm {{ 'bg-red-600 text-white' if category == 'error' else 'bg-emerald-600 text-white' }}">{{ message }}</div>
    {% endfor %}
  </div>
  <main class="max-w-6xl mx-auto p-6">
    {{ body }}
  </main>
</body>
</html>
"""

INDEX_HTML = """
<section class="animate-in text-center py-16">
  <h1 class="text-4xl font-bold mb-4">Find your next role</h1>
  <p class="text-slate-600 mb-8">Browse open positions, apply with your resume, and track applicants as a recruiter.</p>
  <div class="flex justify-center gap-3">
    <a class="px-5 py-2 rounded bg-blue-600 text-white hover:bg-blue-700" href="{{ url_for('portal.jobs') }}">Browse jobs</a>
    {% if not (g.auth and g.auth.user) %}
    <a class="px-5 py-2 rounded border border-slate-300 hover:bg-white" href="{{ url_for('portal.signup') }}">Create an account</a>
    {% endif %}
  </div>
</section>
"""

LOGIN_HTML = """
<div class="max-w-md mx-auto animate-in">
  <div class="bg-white shadow-sm ring-1 ring-slate-200 rounded-lg p-6">
    <h1 class="text-2xl font-bold mb-1">Welcome back</h1>
    <p class="text-sm text-slate-500 mb-4">Log in as a job seeker or a recruiter.</p>
    <form method="post" class="space-y-4">
      <input type="hidden" name="next" value="{{ next_url }}" />
      <div>
        <label class="block text-sm text-slate-600">Email</label>
        <input name="email" type="email" value="{{ form.email }}" class="w-full border rounded px-3 py-2" required />
      </div>
      <div>
        <label class="block text-sm text-slate-600">Password</label>
        <input name="password" type="password" class="w-full border rounded px-3 py-2" required />
      </div>
      <div>
        <label class="block text-sm text-slate-600">Role</label>
        <select name="role" class="w-full border rounded px-3 py-2 bg-white">
          <option value="user" {{ 'selected' if form.role != 'recruiter' }}>Job seeker</option>
          <option value="recruiter" {{ 'selected' if form.role == 'recruiter' }}>Recruiter</option>
        </select>
      </div>
      <button class="w-full bg-blue-600 text-white px-4 py-2 rounded hover:bg-blue-700">Log in</button>
    </form>
    <div class="flex justify-between mt-4 text-sm">
      <form method="post" action="{{ url_for('portal.forgot_password', action='open') }}">
        <button class="text-blue-700 underline">Forgot password?</button>
      </form>
      <a class="text-blue-700 underline" href="{{ url_for('portal.signup') }}">Create an account</a>
    </div>
  </div>
</div>

{% if reset.is_open %}
<div class="fixed inset-0 bg-slate-900/40 flex items-center justify-center z-40">
  <div class="bg-white rounded-lg shadow-xl p-6 w-full max-w-md animate-in">
    <div class="flex justify-between items-center mb-3">
      <h2 class="text-lg font-semibold">Reset password</h2>
      <form method="post" action="{{ url_for('portal.forgot_password', action='cancel') }}">
        <button class="text-slate-500 hover:text-slate-800" title="Close">&times;</button>
      </form>
    </div>
    {% if reset.step.value == 'request_otp' %}
    <p class="text-sm text-slate-500 mb-3">We will email you a one-time code.</p>
    <form method="post" action="{{ url_for('portal.forgot_password', action='request-otp') }}" class="space-y-3">
      <input name="email" type="email" value="{{ reset.email }}" placeholder="Email" class="w-full border rounded px-3 py-2" required />
      <select name="role" class="w-full border rounded px-3 py-2 bg-white">
        <option value="user" {{ 'selected' if reset.role != 'recruiter' }}>Job seeker</option>
        <option value="recruiter" {{ 'selected' if reset.role == 'recruiter' }}>Recruiter</option>
      </select>
      <button class="w-full bg-blue-600 text-white px-4 py-2 rounded hover:bg-blue-700">Send OTP</button>
    </form>
    {% else %}
    <p class="text-sm text-slate-500 mb-3">Enter the code sent to <b>{{ reset.email }}</b>.</p>
    <form method="post" action="{{ url_for('portal.forgot_password', action='reset') }}" class="space-y-3">
      <input name="otp" inputmode="numeric" placeholder="OTP" class="w-full border rounded px-3 py-2" required />
      <input name="new_password" type="password" placeholder="New password" class="w-full border rounded px-3 py-2" required />
      <input name="confirm_password" type="password" placeholder="Confirm password" class="w-full border rounded px-3 py-2" required />
      <button class="w-full bg-blue-600 text-white px-4 py-2 rounded hover:bg-blue-700">Reset password</button>
    </form>
    <form method="post" action="{{ url_for('portal.forgot_password', action='back') }}" class="mt-2">
      <button class="text-sm text-blue-700 underline">&larr; Back</button>
    </form>
    {% endif %}
  </div>
</div>
{% endif %}
"""

SIGNUP_HTML = """
<div class="max-w-md mx-auto animate-in">
  <div class="bg-white shadow-sm ring-1 ring-slate-200 rounded-lg p-6">
    <h1 class="text-2xl font-bold mb-4">Create an account</h1>
    <form method="post" class="space-y-4">
      <div>
        <label class="block text-sm text-slate-600">Name</label>
        <input name="name" value="{{ form.name }}" class="w-full border rounded px-3 py-2" required />
        {% if errors.name %}<p class="text-xs text-red-600 mt-1">{{ errors.name }}</p>{% endif %}
      </div>
      <div>
        <label class="block text-sm text-slate-600">Email</label>
        <input name="email" type="email" value="{{ form.email }}" class="w-full border rounded px-3 py-2" required />
        {% if errors.email %}<p class="text-xs text-red-600 mt-1">{{ errors.email }}</p>{% endif %}
      </div>
      <div class="grid grid-cols-2 gap-3">
        <div>
          <label class="block text-sm text-slate-600">Password</label>
          <input name="password" type="password" class="w-full border rounded px-3 py-2" required />
        </div>
        <div>
          <label class="block text-sm text-slate-600">Confirm</label>
          <input name="confirm_password" type="password" class="w-full border rounded px-3 py-2" required />
        </div>
      </div>
      {% if errors.confirm_password %}<p class="text-xs text-red-600">{{ errors.confirm_password }}</p>{% endif %}
      <div>
        <label class="block text-sm text-slate-600">I am a</label>
        <select name="role" class="w-full border rounded px-3 py-2 bg-white">
          <option value="user" {{ 'selected' if form.role != 'recruiter' }}>Job seeker</option>
          <option value="recruiter" {{ 'selected' if form.role == 'recruiter' }}>Recruiter</option>
        </select>
      </div>
      <button class="w-full bg-blue-600 text-white px-4 py-2 rounded hover:bg-blue-700">Sign up</button>
    </form>
    <p class="text-sm mt-4">Already registered? <a class="text-blue-700 underline" href="{{ url_for('portal.login') }}">Log in</a></p>
  </div>
</div>
"""

JOBS_HTML = """
<div class="flex items-center justify-between mb-4 animate-in">
  <h1 class="text-2xl font-bold">Jobs</h1>
  {% if g.auth.role == 'recruiter' %}
  <a class="bg-blue-600 text-white px-3 py-2 rounded hover:bg-blue-700" href="{{ url_for('portal.post_job') }}">+ Post Job</a>
  {% endif %}
</div>

<form method="get" class="bg-white shadow-sm ring-1 ring-slate-200 rounded-lg p-4 mb-6 animate-in">
  <input type="hidden" name="prev_country" value="{{ filters.country }}" />
  <input type="hidden" name="prev_state" value="{{ filters.state }}" />
  <div class="grid grid-cols-1 md:grid-cols-4 gap-3">
    <input class="md:col-span-2 border border-slate-300 rounded px-3 py-2" name="q" value="{{ filters.search }}" placeholder="Search title, company or location" />
    <input class="border border-slate-300 rounded px-3 py-2" name="location" value="{{ filters.location }}" placeholder="Location (server search)" />
    <input class="border border-slate-300 rounded px-3 py-2" name="requirements" value="{{ filters.requirements }}" placeholder="Skill / requirement" />
    <select name="country" class="border border-slate-300 rounded px-3 py-2 bg-white" onchange="this.form.submit()">
      <option value="">All countries</option>
      {% for c in options.countries %}<option value="{{ c }}" {{ 'selected' if c == filters.country }}>{{ c }}</option>{% endfor %}
    </select>
    <select name="state" class="border border-slate-300 rounded px-3 py-2 bg-white" onchange="this.form.submit()" {{ 'disabled' if not options.states }}>
      <option value="">All states</option>
      {% for s in options.states %}<option value="{{ s }}" {{ 'selected' if s == filters.state }}>{{ s }}</option>{% endfor %}
    </select>
    <select name="city" class="border border-slate-300 rounded px-3 py-2 bg-white" {{ 'disabled' if not options.cities }}>
      <option value="">All cities</option>
      {% for c in options.cities %}<option value="{{ c }}" {{ 'selected' if c == filters.city }}>{{ c }}</option>{% endfor %}
    </select>
    <select name="type" class="border border-slate-300 rounded px-3 py-2 bg-white">
      <option value="">All types</option>
      {% for t in options.types %}<option value="{{ t }}" {{ 'selected' if t == filters.type }}>{{ t }}</option>{% endfor %}
    </select>
    <input class="border border-slate-300 rounded px-3 py-2" type="number" min="0" name="experience_min" value="{{ filters.experience_min if filters.experience_min is not none else '' }}" placeholder="Min years" />
    <input class="border border-slate-300 rounded px-3 py-2" type="number" min="0" name="experience_max" value="{{ filters.experience_max if filters.experience_max is not none else '' }}" placeholder="Max years" />
    <div class="flex gap-2">
      <button class="flex-1 bg-blue-600 text-white px-3 py-2 rounded hover:bg-blue-700">Filter</button>
      {% if filtered %}<a class="px-3 py-2 rounded border border-slate-300 hover:bg-slate-100" href="{{ url_for('portal.jobs') }}">Reset</a>{% endif %}
    </div>
  </div>
</form>

{% if jobs.state == 'failed' %}
  <div class="bg-red-50 text-red-700 rounded p-4">{{ jobs.message }}</div>
{% elif jobs.state == 'loading' %}
  <div class="grid grid-cols-1 md:grid-cols-3 gap-4">
    {% for _ in range(3) %}<div class="h-40 bg-slate-200 rounded-lg animate-pulse"></div>{% endfor %}
  </div>
{% elif not visible %}
  <div class="text-center text-slate-500 py-16 animate-in">{{ 'No jobs match your filters.' if filtered else 'No jobs have been posted yet.' }}</div>
{% else %}
  <div class="text-sm text-slate-500 mb-2">{{ visible|length }} of {{ jobs.value|length }} jobs</div>
  <div class="grid grid-cols-1 md:grid-cols-3 gap-4">
    {% for job in visible %}
    <div class="lift animate-in relative bg-white rounded-lg shadow-sm ring-1 ring-slate-200 overflow-hidden" style="animation-delay: {{ loop.index0 * 60 }}ms">
      <div class="absolute top-0 left-0 w-full h-1.5 bg-gradient-to-r from-blue-500 to-purple-500"></div>
      <div class="p-4 space-y-2">
        <div class="flex justify-between items-start">
          <div>
            <h2 class="font-semibold text-lg">{{ job.title }}</h2>
            <div class="text-sm text-slate-600">{{ job.company.display_name }}</div>
          </div>
          {% if job.type_value %}<span class="text-xs px-2 py-1 rounded-full {{ 'bg-blue-600 text-white' if job.type_value == 'full-time' else 'bg-slate-100' }}">{{ job.type_value }}</span>{% endif %}
        </div>
        <div class="text-sm text-slate-600">{{ job.place }}</div>
        {% if job.experience.label() %}<div class="text-sm text-slate-600">{{ job.experience.label() }}</div>{% endif %}
        <div class="flex flex-wrap gap-1">
          {% for req in job.requirements[:3] %}<span class="text-xs border rounded-full px-2 py-0.5">{{ req }}</span>{% endfor %}
          {% if job.requirements|length > 3 %}<span class="text-xs border rounded-full px-2 py-0.5">+{{ job.requirements|length - 3 }} more</span>{% endif %}
        </div>
        <div class="flex justify-between items-center pt-2">
          <a class="px-3 py-1 rounded border border-slate-300 text-sm hover:bg-slate-100" href="{{ url_for('portal.job_detail', job_id=job.id) }}">View Details</a>
          {% if g.auth.role == 'recruiter' %}
          <form method="post" action="{{ url_for('portal.delete_job', job_id=job.id) }}" onsubmit="return confirm('Delete this job? This cannot be undone.');">
            <input type="hidden" name="next" value="{{ current_url }}" />
            <button class="px-3 py-1 rounded bg-red-600 text-white text-sm hover:bg-red-700">Delete</button>
          </form>
          {% endif %}
        </div>
      </div>
    </div>
    {% endfor %}
  </div>
{% endif %}
"""

JOB_HTML = """
<a class="text-blue-700 underline" href="{{ url_for('portal.jobs') }}">&larr; Back to jobs</a>
{% if job.state == 'failed' %}
  <div class="bg-red-50 text-red-700 rounded p-4 mt-4">{{ job.message }}</div>
{% else %}
{% set j = job.value %}
<div class="bg-white shadow-sm ring-1 ring-slate-200 rounded-lg p-6 mt-4 animate-in">
  <div class="flex justify-between items-start mb-4">
    <div>
      <h1 class="text-2xl font-bold">{{ j.title }}</h1>
      <div class="text-slate-600">{{ j.company.display_name }}{% if j.company.profile and j.company.profile.industry %} &middot; {{ j.company.profile.industry }}{% endif %}</div>
    </div>
    <span class="text-xs px-2 py-1 rounded-full {{ 'bg-emerald-100 text-emerald-800' if j.is_open else 'bg-red-100 text-red-800' }}">{{ j.status_value or 'open' }}</span>
  </div>
  <div class="grid grid-cols-1 md:grid-cols-4 gap-4 mb-6 text-sm">
    <div><div class="text-slate-500">Location</div><div>{{ j.place or '-' }}</div></div>
    <div><div class="text-slate-500">Type</div><div>{{ j.type_value or '-' }}</div></div>
    <div><div class="text-slate-500">Experience</div><div>{{ j.experience.label() or '-' }}</div></div>
    <div><div class="text-slate-500">Salary</div><div>{{ j.salary.label() if j.salary else '-' }}</div></div>
  </div>
  <h2 class="font-semibold mb-1">Description</h2>
  <p class="text-slate-700 whitespace-pre-wrap mb-4">{{ j.description }}</p>
  {% if j.requirements %}
  <h2 class="font-semibold mb-1">Requirements</h2>
  <ul class="list-disc list-inside text-sm mb-4">
    {% for r in j.requirements %}<li>{{ r }}</li>{% endfor %}
  </ul>
  {% endif %}
  <div class="flex gap-3">
    {% if g.auth.role == 'user' and j.is_open %}
    <a class="bg-blue-600 text-white px-4 py-2 rounded hover:bg-blue-700" href="{{ url_for('portal.apply', job_id=j.id) }}">Apply Now</a>
    {% elif g.auth.role == 'recruiter' %}
    <a class="bg-violet-600 text-white px-4 py-2 rounded hover:bg-violet-700" href="{{ url_for('portal.applicants', job_id=j.id) }}">View applicants</a>
    {% endif %}
  </div>
</div>
{% endif %}
"""

APPLY_HTML = """
<a class="text-blue-700 underline" href="{{ url_for('portal.job_detail', job_id=job_id) }}">&larr; Back</a>
<div class="max-w-3xl mx-auto bg-white shadow-sm ring-1 ring-slate-200 rounded-lg p-6 mt-4 animate-in">
  <h1 class="text-2xl font-bold mb-2">Apply{% if job.state == 'loaded' %}: {{ job.value.title }}{% endif %}</h1>
  <p class="text-slate-600 mb-4">Upload a PDF resume or reuse one you sent before.</p>

  {% if resumes.state == 'failed' %}
    <div class="bg-amber-50 text-amber-800 rounded p-3 mb-4 text-sm">Saved resumes could not be loaded: {{ resumes.message }}</div>
  {% elif resumes.state == 'loaded' and not resumes.is_empty %}
  <div class="mb-6">
    <h2 class="font-semibold mb-2">Saved resumes</h2>
    <ul class="divide-y divide-slate-100 border rounded">
      {% for r in resumes.value %}
      <li class="flex items-center justify-between px-3 py-2 text-sm">
        <a class="text-blue-700 underline" href="{{ r.url }}" target="_blank" rel="noopener">{{ r.name or r.url }}</a>
        <div class="flex gap-2">
          <form method="post">
            <input type="hidden" name="resume_url" value="{{ r.url }}" />
            <button class="px-3 py-1 rounded bg-blue-600 text-white hover:bg-blue-700">Use this</button>
          </form>
          {% if r.id %}
          <form method="post" action="{{ url_for('portal.delete_resume', resume_id=r.id) }}">
            <input type="hidden" name="next" value="{{ request.path }}" />
            <button class="px-3 py-1 rounded border border-red-300 text-red-700 hover:bg-red-50">Delete</button>
          </form>
          {% endif %}
        </div>
      </li>
      {% endfor %}
    </ul>
  </div>
  {% endif %}

  <form method="post" enctype="multipart/form-data" class="space-y-4">
    <div>
      <label class="block text-sm text-slate-600">Resume (.pdf)</label>
      <input name="resume" type="file" accept=".pdf,application/pdf" class="w-full border rounded px-3 py-2 bg-white" required />
      {% if errors.resume %}<p class="text-xs text-red-600 mt-1">{{ errors.resume }}</p>{% endif %}
    </div>
    <button class="bg-blue-600 text-white px-4 py-2 rounded hover:bg-blue-700">Submit application</button>
  </form>
</div>
"""

APPLICANTS_HTML = """
<a class="text-blue-700 underline" href="{{ url_for('portal.job_detail', job_id=job_id) }}">&larr; Back</a>
<h1 class="text-2xl font-bold my-4">Applicants{% if job.state == 'loaded' %} - {{ job.value.title }}{% endif %}</h1>
{% if applications.state == 'failed' %}
  <div class="bg-red-50 text-red-700 rounded p-4">{{ applications.message }}</div>
{% elif applications.is_empty %}
  <div class="text-center text-slate-500 py-16 animate-in">No applications yet.</div>
{% else %}
<div class="grid grid-cols-1 md:grid-cols-2 gap-4">
  {% for a in applications.value %}
  <div class="lift animate-in bg-white rounded-lg shadow-sm ring-1 ring-slate-200 p-4" style="animation-delay: {{ loop.index0 * 60 }}ms">
    <div class="flex justify-between items-start">
      <div class="flex items-center gap-3">
        {% if a.applicant.image %}<img src="{{ a.applicant.image }}" alt="" class="w-10 h-10 rounded-full object-cover" />{% endif %}
        <div>
          <div class="font-semibold">{{ a.applicant.name }}</div>
          <div class="text-sm text-slate-600">{{ a.applicant.email }}</div>
        </div>
      </div>
      <span class="text-xs px-2 py-1 rounded-full {{ {'accepted': 'bg-emerald-100 text-emerald-800', 'rejected': 'bg-red-100 text-red-800'}.get(a.status_value, 'bg-amber-100 text-amber-800') }}">{{ a.status_value }}</span>
    </div>
    {% if a.applicant.skills %}
    <div class="flex flex-wrap gap-1 mt-3">
      {% for s in a.applicant.skills[:5] %}<span class="text-xs border rounded-full px-2 py-0.5">{{ s }}</span>{% endfor %}
    </div>
    {% endif %}
    <div class="flex gap-3 mt-3 text-sm">
      {% if a.resume %}<a class="text-blue-700 underline" href="{{ a.resume }}" target="_blank" rel="noopener">Resume</a>{% endif %}
      {% if a.applicant.id %}<a class="text-blue-700 underline" href="{{ url_for('portal.applicant_profile', user_id=a.applicant.id) }}">View profile</a>{% endif %}
    </div>
  </div>
  {% endfor %}
</div>
{% endif %}
"""

APPLICANT_HTML = """
<a class="text-blue-700 underline" href="javascript:history.back()">&larr; Back</a>
{% if profile.state == 'failed' %}
  <div class="bg-red-50 text-red-700 rounded p-4 mt-4">{{ profile.message }}</div>
{% else %}
{% set p = profile.value %}
<div class="bg-white shadow-sm ring-1 ring-slate-200 rounded-lg p-6 mt-4 animate-in">
  <div class="flex items-center gap-4 mb-4">
    {% if p.image %}<img src="{{ p.image }}" alt="" class="w-16 h-16 rounded-full object-cover" />{% endif %}
    <div>
      <h1 class="text-2xl font-bold">{{ p.name }}</h1>
      <div class="text-slate-600">{{ p.email }}</div>
      {% if p.address %}<div class="text-sm text-slate-500">{{ p.address }}</div>{% endif %}
    </div>
  </div>
  __SEEKER_SECTIONS__
</div>
{% endif %}
"""

SEEKER_SECTIONS_HTML = """
{% if p.skills %}
<h2 class="font-semibold mb-1">Skills</h2>
<div class="flex flex-wrap gap-1 mb-4">{% for s in p.skills %}<span class="text-xs border rounded-full px-2 py-0.5">{{ s }}</span>{% endfor %}</div>
{% endif %}
{% if p.education %}
<h2 class="font-semibold mb-1">Education</h2>
<ul class="mb-4 text-sm space-y-1">
  {% for e in p.education %}<li><b>{{ e.degree }}</b> &middot; {{ e.institution }}{% if e.year %} ({{ e.year }}){% endif %}</li>{% endfor %}
</ul>
{% endif %}
{% if p.experience %}
<h2 class="font-semibold mb-1">Experience</h2>
<ul class="text-sm space-y-2">
  {% for x in p.experience %}
  <li><b>{{ x.position }}</b> at {{ x.company }}{% if x.duration %} &middot; {{ x.duration }}{% endif %}
    {% if x.description %}<div class="text-slate-600">{{ x.description }}</div>{% endif %}</li>
  {% endfor %}
</ul>
{% endif %}
"""

PROFILE_HTML = """
{% if profile.state == 'failed' %}
  <div class="bg-red-50 text-red-700 rounded p-4">{{ profile.message }}</div>
{% else %}
{% set p = profile.value %}
<div class="rounded-lg p-6 mb-6 text-white bg-gradient-to-r from-blue-600 to-purple-600 animate-in">
  <div class="flex items-center gap-4">
    {% if p.image %}<img src="{{ p.image }}" alt="" class="w-20 h-20 rounded-full object-cover ring-4 ring-white/40" />{% endif %}
    <div>
      <h1 class="text-3xl font-bold">{{ p.name }}</h1>
      <div class="opacity-90">{{ p.email }}</div>
      <div class="text-sm opacity-80">{{ 'Recruiter' if p.role == 'recruiter' else 'Job seeker' }}</div>
    </div>
    <a class="ml-auto px-4 py-2 rounded bg-white/20 hover:bg-white/30" href="{{ url_for('portal.edit_profile') }}">Edit profile</a>
  </div>
</div>

<div class="bg-white shadow-sm ring-1 ring-slate-200 rounded-lg p-4 mb-6 animate-in" style="animation-delay: 80ms">
  <h2 class="font-semibold mb-2">Profile Completion</h2>
  <div class="w-full h-2 bg-slate-200 rounded"><div class="h-2 rounded bg-blue-600 transition-all duration-700" style="width: {{ '%.0f'|format(completion.percent) }}%"></div></div>
  <p class="text-sm text-slate-600 mt-2">Your profile is {{ '%.0f'|format(completion.percent) }}% complete</p>
  {% if completion.missing %}
  <div class="text-sm mt-2">Missing: {{ completion.missing|join(', ') }}</div>
  {% endif %}
</div>

<div class="bg-white shadow-sm ring-1 ring-slate-200 rounded-lg p-6 animate-in" style="animation-delay: 160ms">
  {% if p.role == 'recruiter' %}
  <h2 class="font-semibold mb-3">Company</h2>
  <dl class="grid grid-cols-1 md:grid-cols-2 gap-3 text-sm">
    <div><dt class="text-slate-500">Name</dt><dd>{{ p.company_name or '-' }}</dd></div>
    <div><dt class="text-slate-500">Industry</dt><dd>{{ p.industry or '-' }}</dd></div>
    <div><dt class="text-slate-500">Address</dt><dd>{{ p.company_address or '-' }}</dd></div>
    <div><dt class="text-slate-500">Website</dt><dd>{% if p.website %}<a class="text-blue-700 underline" href="{{ p.website }}" target="_blank" rel="noopener">{{ p.website }}</a>{% else %}-{% endif %}</dd></div>
    <div class="md:col-span-2"><dt class="text-slate-500">About</dt><dd class="whitespace-pre-wrap">{{ p.company_description or '-' }}</dd></div>
  </dl>
  {% else %}
  {% if p.address %}<div class="text-sm text-slate-600 mb-4">{{ p.address }}</div>{% endif %}
  __SEEKER_SECTIONS__
  {% endif %}
</div>
{% endif %}
"""

PROFILE_EDIT_HTML = """
<a class="text-blue-700 underline" href="{{ url_for('portal.profile') }}">&larr; Back to profile</a>
<form method="post" enctype="multipart/form-data" class="max-w-3xl mx-auto bg-white shadow-sm ring-1 ring-slate-200 rounded-lg p-6 mt-4 space-y-5 animate-in">
  <h1 class="text-2xl font-bold">Edit profile</h1>
  <div>
    <label class="block text-sm text-slate-600">Name</label>
    <input name="name" value="{{ form.name }}" class="w-full border rounded px-3 py-2" />
    {% if errors.name %}<p class="text-xs text-red-600 mt-1">{{ errors.name }}</p>{% endif %}
  </div>
  <div>
    <label class="block text-sm text-slate-600">Profile image</label>
    <input name="profileImage" type="file" accept="image/*" class="w-full border rounded px-3 py-2 bg-white" />
    {% if errors.profileImage %}<p class="text-xs text-red-600 mt-1">{{ errors.profileImage }}</p>{% endif %}
  </div>

  {% if form.role == 'recruiter' %}
    {% for key, label in [('companyName', 'Company name'), ('companyAddress', 'Company address'), ('website', 'Website'), ('industry', 'Industry')] %}
    <div>
      <label class="block text-sm text-slate-600">{{ label }}</label>
      <input name="{{ key }}" value="{{ recruiter_values[key] }}" class="w-full border rounded px-3 py-2" />
      {% if errors[key] %}<p class="text-xs text-red-600 mt-1">{{ errors[key] }}</p>{% endif %}
    </div>
    {% endfor %}
    <div>
      <label class="block text-sm text-slate-600">Company description</label>
      <textarea name="companyDescription" rows="4" class="w-full border rounded px-3 py-2">{{ form.company_description }}</textarea>
    </div>
  {% else %}
    <div>
      <label class="block text-sm text-slate-600">Address</label>
      <input name="address" value="{{ form.address }}" class="w-full border rounded px-3 py-2" />
      {% if errors.address %}<p class="text-xs text-red-600 mt-1">{{ errors.address }}</p>{% endif %}
    </div>
    <div>
      <label class="block text-sm text-slate-600">Skills (comma separated)</label>
      <input name="skills" value="{{ form.skills|join(', ') }}" class="w-full border rounded px-3 py-2" />
    </div>

    <fieldset class="space-y-3">
      <div class="flex justify-between items-center">
        <legend class="font-semibold">Education</legend>
        <button name="intent" value="add-education" class="text-sm px-3 py-1 rounded border border-slate-300 hover:bg-slate-100">+ Add</button>
      </div>
      {% for e in form.education %}{% set i = loop.index0 %}
      <div class="grid grid-cols-1 md:grid-cols-4 gap-2 items-start border rounded p-3 animate-in">
        {% for key, label, value in [('institution', 'College / school', e.institution), ('degree', 'Degree', e.degree), ('year', 'Graduation year', e.year)] %}
        <div>
          <input name="education-{{ i }}-{{ key }}" value="{{ value }}" placeholder="{{ label }}" class="w-full border rounded px-2 py-1" />
          {% if errors['education-%d-%s'|format(i, key)] %}<p class="text-xs text-red-600">{{ errors['education-%d-%s'|format(i, key)] }}</p>{% endif %}
        </div>
        {% endfor %}
        <button name="intent" value="remove-education-{{ i }}" class="text-sm text-red-700 underline">Remove</button>
      </div>
      {% endfor %}
    </fieldset>

    <fieldset class="space-y-3">
      <div class="flex justify-between items-center">
        <legend class="font-semibold">Experience</legend>
        <button name="intent" value="add-experience" class="text-sm px-3 py-1 rounded border border-slate-300 hover:bg-slate-100">+ Add</button>
      </div>
      {% for x in form.experience %}{% set i = loop.index0 %}
      <div class="grid grid-cols-1 md:grid-cols-3 gap-2 border rounded p-3 animate-in">
        {% for key, label, value in [('company', 'Company', x.company), ('position', 'Position', x.position), ('duration', 'Duration', x.duration)] %}
        <div>
          <input name="experience-{{ i }}-{{ key }}" value="{{ value }}" placeholder="{{ label }}" class="w-full border rounded px-2 py-1" />
          {% if errors['experience-%d-%s'|format(i, key)] %}<p class="text-xs text-red-600">{{ errors['experience-%d-%s'|format(i, key)] }}</p>{% endif %}
        </div>
        {% endfor %}
        <textarea name="experience-{{ i }}-description" rows="2" placeholder="Description" class="md:col-span-3 w-full border rounded px-2 py-1">{{ x.description }}</textarea>
        <button name="intent" value="remove-experience-{{ i }}" class="text-sm text-red-700 underline text-left">Remove</button>
      </div>
      {% endfor %}
    </fieldset>
  {% endif %}

  <button name="intent" value="save" class="bg-blue-600 text-white px-4 py-2 rounded hover:bg-blue-700">Save changes</button>
</form>
"""

POST_JOB_HTML = """
<form method="post" class="max-w-4xl mx-auto bg-white shadow-sm ring-1 ring-slate-200 rounded-lg p-6 space-y-4 animate-in">
  <h1 class="text-2xl font-bold">Post a New Job</h1>
  {% if geo_error %}<div class="p-2 bg-red-100 text-red-700 rounded">{{ geo_error }}</div>{% endif %}
  <div>
    <label class="block text-sm text-slate-600">Title</label>
    <input name="title" value="{{ form.title }}" class="w-full border rounded px-3 py-2" required />
    {% if errors.title %}<p class="text-xs text-red-600 mt-1">{{ errors.title }}</p>{% endif %}
  </div>
  <div>
    <label class="block text-sm text-slate-600">Description</label>
    <textarea name="description" rows="5" class="w-full border rounded px-3 py-2" required>{{ form.description }}</textarea>
    {% if errors.description %}<p class="text-xs text-red-600 mt-1">{{ errors.description }}</p>{% endif %}
  </div>
  <div class="grid grid-cols-1 md:grid-cols-3 gap-3">
    <div>
      <label class="block text-sm text-slate-600">Country</label>
      <select id="country" name="country" class="w-full border rounded px-3 py-2 bg-white">
        <option value="">Select country</option>
        {% for c in countries %}<option value="{{ c.code }}" {{ 'selected' if c.code == form.country }}>{{ c.name }}</option>{% endfor %}
      </select>
      {% if errors.country %}<p class="text-xs text-red-600 mt-1">{{ errors.country }}</p>{% endif %}
    </div>
    <div>
      <label class="block text-sm text-slate-600">State</label>
      <select id="state" name="state" class="w-full border rounded px-3 py-2 bg-white">
        <option value="">Select state</option>
        {% for s in states %}<option value="{{ s }}" {{ 'selected' if s == form.state }}>{{ s }}</option>{% endfor %}
      </select>
    </div>
    <div>
      <label class="block text-sm text-slate-600">City</label>
      <select id="city" name="city" class="w-full border rounded px-3 py-2 bg-white">
        <option value="">Select city</option>
        {% for c in cities %}<option value="{{ c }}" {{ 'selected' if c == form.city }}>{{ c }}</option>{% endfor %}
      </select>
    </div>
  </div>
  <div class="grid grid-cols-1 md:grid-cols-2 gap-3">
    <div>
      <label class="block text-sm text-slate-600">Location label (optional)</label>
      <input name="location" value="{{ form.location }}" placeholder="e.g. Remote, Hybrid - Bengaluru" class="w-full border rounded px-3 py-2" />
    </div>
    <div>
      <label class="block text-sm text-slate-600">Job type</label>
      <select name="type" class="w-full border rounded px-3 py-2 bg-white">
        <option value="">Select type</option>
        {% for t in job_types %}<option value="{{ t }}" {{ 'selected' if t == form.type }}>{{ t }}</option>{% endfor %}
      </select>
      {% if errors.type %}<p class="text-xs text-red-600 mt-1">{{ errors.type }}</p>{% endif %}
    </div>
  </div>
  <div>
    <label class="block text-sm text-slate-600">Requirements (comma separated)</label>
    <input name="requirements" value="{{ form.requirements|join(', ') }}" class="w-full border rounded px-3 py-2" />
  </div>
  <div class="grid grid-cols-1 md:grid-cols-3 gap-3">
    <div>
      <label class="block text-sm text-slate-600">Min experience (years)</label>
      <input name="experience_min" type="number" min="0" value="{{ form.experience_min }}" class="w-full border rounded px-3 py-2" />
      {% if errors.experience_min %}<p class="text-xs text-red-600 mt-1">{{ errors.experience_min }}</p>{% endif %}
    </div>
    <div>
      <label class="block text-sm text-slate-600">Max experience (years)</label>
      <input name="experience_max" type="number" min="0" value="{{ form.experience_max }}" class="w-full border rounded px-3 py-2" />
      {% if errors.experience_max %}<p class="text-xs text-red-600 mt-1">{{ errors.experience_max }}</p>{% endif %}
    </div>
    <div>
      <label class="block text-sm text-slate-600">Salary (optional)</label>
      <input name="salary" value="{{ form.salary }}" class="w-full border rounded px-3 py-2" />
      {% if errors.salary %}<p class="text-xs text-red-600 mt-1">{{ errors.salary }}</p>{% endif %}
    </div>
  </div>
  <button class="bg-blue-600 text-white px-4 py-2 rounded hover:bg-blue-700">Post job</button>
</form>
<script>
async function fill(select, url, placeholder){
  select.innerHTML = `<option value="">${placeholder}</option>`;
  if(!url) return;
  const res = await fetch(url);
  const data = await res.json();
  if(!data.ok){ alert(data.error || 'Lookup failed'); return; }
  for(const name of data.items){
    const opt = document.createElement('option');
    opt.value = name; opt.textContent = name;
    select.appendChild(opt);
  }
}
const country = document.getElementById('country');
const state = document.getElementById('state');
const city = document.getElementById('city');
country.addEventListener('change', () => {
  fill(city, null, 'Select city');
  fill(state, country.value ? '{{ url_for('geo.states') }}?country=' + encodeURIComponent(country.value) : null, 'Select state');
});
state.addEventListener('change', () => {
  fill(city, state.value ? '{{ url_for('geo.cities') }}?country=' + encodeURIComponent(country.value) + '&state=' + encodeURIComponent(state.value) : null, 'Select city');
});
</script>
"""

APPLICANT_HTML = APPLICANT_HTML.replace('__SEEKER_SECTIONS__', SEEKER_SECTIONS_HTML)
PROFILE_HTML = PROFILE_HTML.replace('__SEEKER_SECTIONS__', SEEKER_SECTIONS_HTML)
