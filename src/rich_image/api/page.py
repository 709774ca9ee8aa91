"""Upload page and scenario listing."""

from fastapi import APIRouter
from fastapi.responses import HTMLResponse

from rich_image.domain.generation import ScenarioOption
from rich_image.domain.scenarios import DEFAULT_SCENARIO, SCENARIO_DETAILS

router = APIRouter(tags=["page"])


@router.get("/scenarios")
async def list_scenarios() -> dict[str, object]:
    """Return the selectable scenarios in display order."""
    return {
        "default": DEFAULT_SCENARIO.value,
        "scenarios": [
            ScenarioOption(key=scenario.value, label=details.label)
            for scenario, details in SCENARIO_DETAILS.items()
        ],
    }


@router.get("/", response_class=HTMLResponse)
async def upload_page() -> HTMLResponse:
    """Single-page UI that posts photos to the generation endpoint."""
    return HTMLResponse(_PAGE_HTML)


_PAGE_HTML = """<!doctype html>
<html lang="pt-BR">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>Se Eu Fosse Rico</title>
    <style>
      body { font-family: ui-sans-serif, system-ui, sans-serif; margin: 2rem; }
      h1 { margin-bottom: 0.25rem; }
      .row { margin-bottom: 1.25rem; }
      img.preview { max-width: 320px; max-height: 12rem; display: block; }
      img.result { max-width: 100%; max-height: 90vh; }
      button { padding: 0.5rem 1rem; }
      pre { background: #f6f6f6; padding: 1rem; overflow: auto; }
      pre.error { color: #b00020; }
      #toast { min-height: 1.5rem; }
    </style>
  </head>
  <body>
    <h1>Se Eu Fosse Rico</h1>
    <p>Visualize-se em um mundo de luxo e status.</p>
    <div class="row">
      <label for="picture">1. Envie sua foto</label><br />
      <input id="picture" type="file" accept="image/*" />
      <img id="preview" class="preview" hidden />
    </div>
    <div class="row">
      <div>2. Escolha um cenário de alto status</div>
      <div id="scenarios"></div>
    </div>
    <div class="row">
      <button id="generate" disabled>Gerar Imagem</button>
    </div>
    <div id="toast"></div>
    <pre id="output" hidden></pre>
    <dialog id="dialog">
      <img id="result" class="result" alt="Generated Rich Image" />
      <form method="dialog"><button>Fechar</button></form>
    </dialog>
    <script>
      const state = { photo: null, scenario: 'urban-ceo', loading: false };
      const $ = (id) => document.getElementById(id);

      function toast(text) { $('toast').textContent = text || ''; }
      function render() {
        $('generate').disabled = state.loading || !state.photo;
        $('generate').textContent = state.loading ? 'Gerando...' : 'Gerar Imagem';
      }
      function showOutput(text, isError) {
        const output = $('output');
        output.hidden = !text;
        output.className = isError ? 'error' : '';
        output.textContent = text || '';
      }

      async function loadScenarios() {
        const res = await fetch('scenarios');
        const data = await res.json();
        state.scenario = data.default;
        $('scenarios').innerHTML = data.scenarios.map((s) =>
          `<label><input type="radio" name="scenario" value="${s.key}"` +
          `${s.key === data.default ? ' checked' : ''} /> ${s.label}</label>`
        ).join(' ');
        document.querySelectorAll('input[name=scenario]').forEach((el) =>
          el.addEventListener('change', () => { state.scenario = el.value; })
        );
      }

      $('picture').addEventListener('change', (event) => {
        const file = event.target.files[0];
        if (file && !file.type.startsWith('image/')) {
          toast('Por favor, envie um arquivo de imagem válido.');
          state.photo = null;
        }
        if (!file || !file.type.startsWith('image/')) {
          $('preview').hidden = true;
          state.photo = null;
          render();
          return;
        }
        const reader = new FileReader();
        reader.onloadend = () => {
          state.photo = reader.result;
          $('preview').src = reader.result;
          $('preview').hidden = false;
          render();
        };
        reader.readAsDataURL(file);
      });

      $('generate').addEventListener('click', async () => {
        if (!state.photo) {
          toast('Por favor, envie uma foto primeiro.');
          return;
        }
        state.loading = true;
        showOutput(null);
        toast('Criando sua versão de alto nível…');
        render();
        try {
          const res = await fetch('./', {
            method: 'POST',
            headers: { 'Content-Type': 'application/json' },
            body: JSON.stringify({
              image: state.photo.split(',')[1],
              scenario: state.scenario,
            }),
          });
          if (!res.ok) {
            const text = await res.text();
            let body;
            try { body = JSON.parse(text); }
            catch (e) { body = { message: text.substring(0, 200) + '...', raw_response: text }; }
            throw new Error(
              `Erro HTTP ${res.status} (${res.statusText}): ${JSON.stringify(body, null, 2)}`
            );
          }
          const data = await res.json();
          if (data && data.error) {
            throw new Error(`Erro da Edge Function: ${data.error}`);
          }
          if (!data || !data.imageUrl) {
            throw new Error('Resposta inválida da função de geração de imagem.');
          }
          $('result').src = data.imageUrl;
          $('dialog').showModal();
          showOutput(JSON.stringify(data, null, 2), false);
          toast(data.message);
        } catch (e) {
          const message = e.message || 'Erro desconhecido durante a geração.';
          showOutput(message, true);
          toast(`Falha na geração: ${message}`);
        } finally {
          state.loading = false;
          render();
        }
      });

      loadScenarios();
      render();
    </script>
  </body>
</html>
"""
