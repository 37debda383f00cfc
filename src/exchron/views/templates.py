# Jinja2 templates for the dashboard pages

BASE_HTML = """
<!doctype html>
<html>
  <head><meta charset="utf-8"><title>{% block title %}Exchron{% endblock %}</title>
  <style>
    body { font-family:-apple-system,BlinkMacSystemFont,Segoe UI,Roboto,sans-serif; margin:2rem; }
    .card { background:#f8f9fb; padding:1rem 1.25rem; border-radius:10px; border:1px solid #e8ebf0; margin-bottom: 1rem; }
    .grid { display:grid; grid-template-columns: repeat(auto-fit, minmax(260px, 1fr)); gap: 1rem; }
    table { border-collapse: collapse; }
    th, td { border: 1px solid #ddd; padding: 6px 8px; text-align:left; }
    th { background: #f5f5f5; }
    .error { background:#ffe3e3; color:#7a0000; padding:.5rem 1rem; border-radius:8px; white-space:pre-wrap; }
    .warn { background:#fff6db; color:#6b4e00; padding:.5rem 1rem; border-radius:8px; }
    .ok { background:#e6ffed; color:#064d1e; padding:.5rem 1rem; border-radius:8px; }
    .muted { color:#666; font-size:.9rem; }
    code { background:#f5f5f5; padding: 1px 4px; border-radius:4px; }
    label { display:block; margin: 6px 0; }
    input[type="range"] { width: 220px; vertical-align: middle; }
  </style>
  </head>
  <body>
    <div style="margin-bottom:10px;">
      <a href="/playground/overview">Overview</a> ·
      <a href="/playground/data-input">Data Input</a> ·
      <a href="/classroom/data-input">Classroom Upload</a> ·
      <a href="/docs" target="_blank">API Docs</a>
    </div>
    <hr>
    {% block content %}{% endblock %}
  </body>
</html>
"""

OVERVIEW_HTML = """
{% extends "base.html" %}
{% block title %}Model Overview{% endblock %}
{% block content %}
<h1>Model Overview</h1>
<p class="muted">Illustrative figures from offline evaluation runs.</p>
{% for model in models %}
<div class="card">
  <h2>{{ model.name }}</h2>
  {% for paragraph in model.description %}<p>{{ paragraph }}</p>{% endfor %}
  <div class="grid">
    <div>
      <h3>Performance Metrics</h3>
      <table>
        {% for label, value in model.metrics.items() %}
        <tr><th>{{ label }}</th><td>{{ format_metric(value) }}</td></tr>
        {% endfor %}
      </table>
    </div>
    <div>
      <h3>Best Parameters</h3>
      <table>
        {% for label, value in model.parameters.items() %}
        <tr><th>{{ label }}</th><td>{{ value }}</td></tr>
        {% endfor %}
      </table>
    </div>
    <div>
      <h3>Metrics Comparison vs {{ model.baseline }}</h3>
      <table>
        <tr><th>Metric</th><th>{{ model.name }}</th><th>{{ model.baseline }}</th></tr>
        {% for label, pair in model.comparison.items() %}
        <tr><td>{{ label }}</td><td>{{ format_metric(pair[0]) }}</td><td>{{ format_metric(pair[1]) }}</td></tr>
        {% endfor %}
      </table>
    </div>
  </div>
</div>
{% endfor %}
{% endblock %}
"""

DATA_INPUT_HTML = """
{% extends "base.html" %}
{% block title %}Data Input{% endblock %}
{% block content %}
<h1>Data Input</h1>
{% if error %}<div class="error">{{ error }}</div>{% endif %}

<div class="card">
  <h2>Manual Entry</h2>
  <form action="/playground/predict" method="post">
    <input type="hidden" name="mode" value="manual">
    <label>Model:
      <select name="model">{% for m in tabular_models %}<option value="{{ m }}">{{ m|upper }}</option>{% endfor %}</select>
    </label>
    {% for f in features %}
    <label title="{{ f.description }}">{{ f.label }}{% if f.unit %} ({{ f.unit }}){% endif %}:
      <input type="range" name="{{ f.key }}" min="{{ f.min }}" max="{{ f.max }}" step="{{ f.step }}" value="{{ f.default }}"
             oninput="this.nextElementSibling.value=this.value">
      <output>{{ f.default }}</output>
    </label>
    {% endfor %}
    <button type="submit">Predict</button>
  </form>
</div>

<div class="card">
  <h2>Data Upload</h2>
  <p class="muted">CSV with the KOI feature columns; the first {{ max_targets }} rows are sent for prediction.</p>
  <form action="/playground/predict" method="post" enctype="multipart/form-data">
    <input type="hidden" name="mode" value="upload">
    <label>Model:
      <select name="model">{% for m in tabular_models %}<option value="{{ m }}">{{ m|upper }}</option>{% endfor %}</select>
    </label>
    <input type="file" name="file" accept=".csv" required>
    <button type="submit">Upload &amp; predict</button>
  </form>
</div>

<div class="card">
  <h2>Preloaded Data</h2>
  <form action="/playground/predict" method="post">
    <input type="hidden" name="mode" value="pre-loaded">
    <label>Model:
      <select name="model">{% for m in tabular_models %}<option value="{{ m }}">{{ m|upper }}</option>{% endfor %}</select>
    </label>
    <label>Dataset:
      <select name="dataset">{% for d in datasets %}<option value="{{ d }}">{{ d|capitalize }}</option>{% endfor %}</select>
    </label>
    <button type="submit">Predict</button>
  </form>
</div>

<div class="card">
  <h2>Light Curve Models</h2>
  <form action="/playground/predict" method="post">
    <input type="hidden" name="mode" value="light-curve">
    <label>Model:
      <select name="model">{% for m in light_curve_models %}<option value="{{ m }}">{{ m|upper }}</option>{% endfor %}</select>
    </label>
    <label>Kepler ID: <input name="kepid" required></label>
    <button type="submit">Predict</button>
  </form>
</div>
{% endblock %}
"""

RESULTS_HTML = """
{% extends "base.html" %}
{% block title %}Prediction Results{% endblock %}
{% block content %}
<h1>Prediction</h1>
{% if error %}
  <div class="error">{{ error }}{% if details %}
{{ details }}{% endif %}</div>
  <p><a href="/playground/data-input">Back to data input</a></p>
{% else %}
  <div class="ok">Prediction received ({{ summary.model|upper }}, {{ summary.datasource }}).</div>
  <div class="card">
    <h3>Exoplanet Probability</h3>
    <p>Candidate: <strong>{{ summary.candidate }}</strong></p>
    <p>Non-candidate: <strong>{{ summary.non_candidate }}</strong></p>
    <p>Follow-up priority: <strong>{{ summary.follow_up }}</strong></p>
    {% if summary.kepid %}<p>Kepler ID: <code>{{ summary.kepid }}</code></p>{% endif %}
  </div>
  {% if summary.targets %}
  <div class="card">
    <h3>Individual Targets</h3>
    <table>
      <tr><th>#</th><th>Kepler ID</th><th>Candidate</th><th>Non-candidate</th></tr>
      {% for t in summary.targets %}
      <tr><td>{{ t.key }}</td><td>{{ t.kepid }}</td><td>{{ t.candidate }}</td><td>{{ t.non_candidate }}</td></tr>
      {% endfor %}
    </table>
  </div>
  {% endif %}
{% endif %}

<h2>Analysis</h2>
<p class="muted">Illustrative panels.</p>
<div class="grid">
  {% for panel in panels %}
  <div class="card">
    <h4>{{ panel.title }}</h4>
    {% for line in panel.lines %}<p>{{ line }}</p>{% endfor %}
  </div>
  {% endfor %}
  <div class="card">
    <h4>Planet Type Likelihood</h4>
    {% for t in planet_types %}<p>{{ t.label }}: {{ t.pct }}%</p>{% endfor %}
  </div>
</div>
{% endblock %}
"""

CLASSROOM_HTML = """
{% extends "base.html" %}
{% block title %}Classroom Data Input{% endblock %}
{% block content %}
<h1>Classroom: Upload Training Data</h1>
<div class="card">
  <form action="/classroom/data-input" method="post" enctype="multipart/form-data">
    <input type="file" name="file" accept=".csv" required>
    <button type="submit">Analyze</button>
  </form>
  <p class="muted">At least {{ min_rows }} rows, one categorical/boolean target and one numeric/categorical feature.</p>
</div>
{% if error %}<div class="error">{{ error }}</div>{% endif %}
{% if parsed %}
  <div class="ok">{{ parsed.raw_dataset.name }}: {{ parsed.raw_dataset.row_count }} rows, {{ parsed.raw_dataset.column_count }} columns</div>
  {% for w in parsed.warnings %}<div class="warn">{{ w }}</div>{% endfor %}
  <div class="card">
    <table>
      <tr><th>#</th><th>Column</th><th>Type</th><th>Missing</th><th>Details</th></tr>
      {% for col in parsed.columns %}
      {% set d = col.to_dict() %}
      <tr>
        <td>{{ col.index }}</td><td>{{ col.name }}</td><td>{{ col.inferred_type }}</td><td>{{ col.missing_count }}</td>
        <td>
          {% if d.mean is defined %}min {{ '%g'|format(d.min) }}, max {{ '%g'|format(d.max) }}, mean {{ '%.4g'|format(d.mean) }}, std {{ '%.4g'|format(d.std) }}{% endif %}
          {% if d.unique_values is defined %}{{ d.unique_values|join(', ') }}{% endif %}
        </td>
      </tr>
      {% endfor %}
    </table>
  </div>
{% endif %}
{% endblock %}
"""

TEMPLATES = {
    "base.html": BASE_HTML,
    "overview.html": OVERVIEW_HTML,
    "data_input.html": DATA_INPUT_HTML,
    "results.html": RESULTS_HTML,
    "classroom.html": CLASSROOM_HTML,
}
