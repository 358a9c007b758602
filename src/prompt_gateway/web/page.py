import html
import json

from prompt_gateway.client.controller import IDLE_LABEL, LOADING_LABEL, TRANSPORT_ERROR_MESSAGE, FormController

TITLE = "Ask ChatGPT a Question!"

_SCRIPT = """
(function () {
  const form = document.getElementById("prompt-form");
  const input = document.getElementById("prompt");
  const submit = document.getElementById("submit");
  const output = document.getElementById("result");
  const state = { prompt: input.value, loading: false, data: null };

  function render() {
    submit.value = state.loading ? __LOADING__ : __IDLE__;
    submit.disabled = state.loading;
    if (!state.data) {
      output.hidden = true;
      return;
    }
    output.hidden = false;
    if (state.data.result !== null && state.data.result !== undefined) {
      output.textContent = state.data.result;
    } else if (state.data.error) {
      output.textContent = state.data.error.message;
    } else {
      output.textContent = "";
    }
  }

  input.addEventListener("input", function (e) {
    state.prompt = e.target.value;
  });

  form.addEventListener("submit", async function (e) {
    e.preventDefault();
    if (state.loading) {
      return;
    }
    state.loading = true;
    render();
    try {
      const response = await fetch(__URL__, {
        method: "POST",
        headers: { "Content-Type": "application/json" },
        body: JSON.stringify({ prompt: state.prompt }),
      });
      state.data = await response.json();
    } catch (err) {
      console.error("Error submitting prompt: ", err);
      state.data = { result: null, error: { message: __TRANSPORT_ERROR__ } };
    } finally {
      state.loading = false;
      render();
    }
  });
})();
"""


def render_index(controller: FormController) -> str:
    """Render the prompt form with the controller's current state."""
    script = (
        _SCRIPT.replace("__URL__", json.dumps(controller.url))
        .replace("__LOADING__", json.dumps(LOADING_LABEL))
        .replace("__IDLE__", json.dumps(IDLE_LABEL))
        .replace("__TRANSPORT_ERROR__", json.dumps(TRANSPORT_ERROR_MESSAGE))
    )
    disabled = " disabled" if controller.submit_disabled else ""
    hidden = "" if controller.result is not None else " hidden"
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <title>{html.escape(TITLE)}</title>
</head>
<body>
  <main>
    <h1>{html.escape(TITLE)}</h1>
    <form id="prompt-form">
      <input id="prompt" name="prompt" placeholder="Enter a prompt" value="{html.escape(controller.prompt)}">
      <input id="submit" type="submit" value="{html.escape(controller.submit_label)}"{disabled}>
      <div id="result"{hidden}>{html.escape(controller.display_text)}</div>
    </form>
  </main>
  <script>{script}</script>
</body>
</html>
"""
