# main.py
from flask import Flask, request, render_template_string, jsonify
import logging, os

from bmi import RANGES, SCALE_TICKS, EditHeight, EditWeight, Calculate, Reset, run, render

logger = logging.getLogger(__name__)

app = Flask(__name__)

PAGE = """
<!doctype html>
<html lang="ru">
<head>
  <meta charset="utf-8" />
  <meta name="viewport" content="width=device-width, initial-scale=1" />
  <title>Калькулятор BMI</title>
  <style>
    :root {
      --bg: #0b0f14;
      --card: #121822;
      --muted: #9fb0c3;
      --accent: #5ac8fa;
      --text: #e9eef5;
      --danger: #ff6b6b;
      --blue: #3b82f6;
      --green: #22c55e;
      --yellow: #eab308;
      --red: #ef4444;
    }
    * { box-sizing: border-box; }
    body {
      margin: 0;
      font-family: ui-sans-serif, system-ui, -apple-system, Segoe UI, Roboto, Arial;
      background: radial-gradient(1200px 800px at 80% -20%, #1a2332 0%, #0b0f14 60%);
      color: var(--text);
    }
    .wrap { max-width: 480px; margin: 40px auto; padding: 16px; }
    .card {
      background: linear-gradient(180deg, #121822, #0e141d);
      border: 1px solid #1f2a3a;
      border-radius: 16px;
      padding: 24px;
      box-shadow: 0 10px 30px #0006, inset 0 1px 0 #ffffff12;
    }
    h1 { margin: 0 0 8px 0; font-weight: 700; text-align: center; }
    p.muted { color: var(--muted); margin-top: 0; text-align: center; }
    .field { padding: 12px; border-radius: 12px; background: #0b111a; border: 1px solid #1b2636; margin-bottom: 12px; }
    .label { font-size: 12px; color: var(--muted); margin-bottom: 6px; display: block; }
    .unit-wrap { position: relative; }
    .unit { position: absolute; right: 12px; top: 50%; transform: translateY(-50%); font-size: 13px; color: var(--muted); }
    input[type="number"]{
      width: 100%;
      font-size: 16px;
      padding: 10px 44px 10px 12px;
      border-radius: 8px;
      border: 1px solid #1e2a3b;
      background: #0f1622;
      color: var(--text);
      outline: none;
    }
    .hint { font-size: 12px; color: #9fb0c3; margin-top: 6px; }
    .buttons { margin-top: 16px; display: flex; gap: 12px; }
    button {
      padding: 12px 16px;
      border-radius: 10px;
      border: 1px solid #24334a;
      background: #142033;
      color: var(--text);
      cursor: pointer;
      font-weight: 600;
    }
    button.primary { flex: 1; background: linear-gradient(180deg, #1c3454, #142441); border-color: #33527a; }
    button:disabled { opacity: 0.6; cursor: not-allowed; }
    .result { margin-top: 16px; padding: 16px; border-radius: 12px; background: #0e1520; text-align: center; }
    .err { color: var(--danger); background: #ff6b6b1a; }
    .scale {
      position: relative; height: 16px; border-radius: 999px; margin: 36px 0 8px;
      background: linear-gradient(90deg, var(--blue), var(--green), var(--yellow), var(--red));
    }
    .marker { position: absolute; bottom: 100%; transform: translateX(-50%); font-size: 12px; font-weight: 700;
      background: #fff; color: #0b0f14; padding: 2px 8px; border-radius: 999px; margin-bottom: 4px; }
    .ticks { display: flex; justify-content: space-between; font-size: 12px; color: var(--muted); }
    .bmi { font-size: 22px; font-weight: 700; color: var(--accent); }
    .tone-blue { color: var(--blue); }
    .tone-green { color: var(--green); }
    .tone-yellow { color: var(--yellow); }
    .tone-red { color: var(--red); }
    .tip { font-size: 13px; color: var(--muted); background: #ffffff0d; padding: 12px; border-radius: 8px; }
  </style>
</head>
<body>
  <div class="wrap">
    <div class="card">
      <h1>Калькулятор BMI</h1>
      <p class="muted">Введите ваши данные для расчета индекса массы тела</p>

      <form id="calcForm" method="POST" novalidate>
        <div class="field">
          <label class="label" for="height">Рост</label>
          <div class="unit-wrap">
            <input type="number" id="height" name="height" step="any" placeholder="Например: 170" value="{{ view.height }}" inputmode="decimal">
            <span class="unit">см</span>
          </div>
          <div class="hint">Допустимо: {{ ranges.height_cm[0]|int }}–{{ ranges.height_cm[1]|int }} см</div>
        </div>

        <div class="field">
          <label class="label" for="weight">Вес</label>
          <div class="unit-wrap">
            <input type="number" id="weight" name="weight" step="any" placeholder="Например: 70" value="{{ view.weight }}" inputmode="decimal">
            <span class="unit">кг</span>
          </div>
          <div class="hint">Допустимо: {{ ranges.weight_kg[0]|int }}–{{ ranges.weight_kg[1]|int }} кг</div>
        </div>

        {% if view.error %}
          <div class="result err" id="error">{{ view.error }}</div>
        {% endif %}

        <div class="buttons">
          <button type="submit" id="submitBtn" class="primary" name="action" value="calculate" {% if not view.can_calculate %}disabled{% endif %}>Рассчитать</button>
          <button type="submit" id="resetBtn" name="action" value="reset">Сбросить</button>
        </div>
      </form>

      {% if view.has_result %}
        <div class="result" id="result">
          <div class="scale">
            <div class="marker" style="left: {{ '%.1f'|format(view.marker_percent) }}%">{{ view.bmi_text }}</div>
          </div>
          <div class="ticks">{% for t in ticks %}<span>{{ t }}</span>{% endfor %}</div>
          <p>Ваш BMI: <span class="bmi">{{ view.bmi_text }}</span></p>
          <p class="tone-{{ view.tone }}">{{ view.category_label }}</p>
          <p class="tip">{{ view.tip }}</p>
        </div>
      {% endif %}
    </div>
  </div>

  <script>
    // calculate stays disabled while either field is empty
    const submitBtn = document.getElementById('submitBtn');
    const heightEl = document.getElementById('height');
    const weightEl = document.getElementById('weight');

    function syncSubmit(){
      submitBtn.disabled = heightEl.value === "" || weightEl.value === "";
    }

    [heightEl, weightEl].forEach(inp => inp.addEventListener('input', syncSubmit));
    syncSubmit();
  </script>
</body>
</html>
"""


def form_events(height, weight, action):
    events = [EditHeight(height), EditWeight(weight)]
    if action == "reset":
        events.append(Reset())
    elif height and weight:
        # calculate is not invokable while either field is empty
        events.append(Calculate())
    return events


def _field(data, name):
    v = data.get(name)
    if v is None:
        return ""
    return str(v)


@app.route("/", methods=["GET","POST"])
def index():
    if request.method == "GET":
        state = run([])
    else:
        state = run(form_events(
            request.form.get("height", ""),
            request.form.get("weight", ""),
            request.form.get("action", "calculate"),
        ))
    return render_template_string(PAGE, view=render(state), ranges=RANGES, ticks=SCALE_TICKS)


@app.route("/api/bmi", methods=["POST"])
def api_bmi():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        logger.info("rejected /api/bmi body: not a JSON object")
        return jsonify({"error": "Expected a JSON object with height and weight."}), 400
    state = run(form_events(_field(data, "height"), _field(data, "weight"), "calculate"))
    return jsonify(render(state).as_dict())


if __name__ == "__main__":
    logging.basicConfig(
        level=os.environ.get("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    port = int(os.environ.get("PORT", 8080))
    app.run(host=os.environ.get("HOST", "0.0.0.0"), port=port)
