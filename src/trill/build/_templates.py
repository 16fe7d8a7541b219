"""Fixed files written into the output tree — plain Python strings.

No template engine here: ``MAIN_PY`` uses ``str.format()`` with
``{meta_ref}``; ``CLIENT_ENTRY_TSX`` has a single placeholder token that
the manifest step replaces verbatim.
"""

# ---------------------------------------------------------------------------
# Server-side runtime bootstrap
# ---------------------------------------------------------------------------

MAIN_PY = '''\
# Generated by trill. Do not edit.
"""Runtime entry for a transpiled trill site.

    import main
    html = main.render("/blog", title="Posts")
"""

import importlib.util
from pathlib import Path

ROOT = Path(__file__).resolve().parent
META_REF = {meta_ref!r}

_modules = {{}}


def load(ref):
    """Import a generated module by its slash-separated reference."""
    module = _modules.get(ref)
    if module is None:
        path = ROOT.joinpath(*ref.split("/")).with_suffix(".py")
        name = "_trill_" + ref.replace("/", "__")
        spec = importlib.util.spec_from_file_location(name, path)
        if spec is None or spec.loader is None:
            raise ImportError(f"Cannot load {{ref!r}} from {{path}}")
        module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(module)
        _modules[ref] = module
    return module


def routes():
    return load(META_REF).ROUTES


def resolve(url):
    stripped = url.strip("/")
    path = "/" + stripped if stripped else "/"
    for route in routes():
        if route.path == path:
            return route
    return None


def render(url, context=None, /, **kwargs):
    route = resolve(url)
    if route is None:
        raise LookupError(f"No route for {{url!r}}")
    data = dict(context or {{}})
    data.update(kwargs)
    html = load(route.page).render(data)
    if route.layout is not None:
        html = load(route.layout).render(data, content=html)
    return html
'''

# ---------------------------------------------------------------------------
# Browser bundle entry
# ---------------------------------------------------------------------------

CLIENT_ENTRY_PLACEHOLDER = "`{[TRILL_COMPONENTS]s}`"

CLIENT_ENTRY_TSX = """\
// Generated by trill. Do not edit.
import { createElement } from "react";
import { createRoot } from "react-dom/client";

type ClientComponent = {
  id: string;
  name: string;
  path: string;
  import: () => Promise<any>;
};

const components: ClientComponent[] = `{[TRILL_COMPONENTS]s}`;

async function mount(el: HTMLElement): Promise<void> {
  const key = el.dataset.island;
  const component = components.find((c) => c.id === key || c.name === key);
  if (!component) return;
  const props = el.dataset.islandProps ? JSON.parse(el.dataset.islandProps) : {};
  const Component = await component.import();
  createRoot(el).render(createElement(Component, props));
}

document.querySelectorAll<HTMLElement>("[data-island]").forEach((el) => {
  void mount(el);
});
"""
