"""Fixed stylesheet written to ``css/site.css`` for every exported site."""

DEFAULT_STYLESHEET = """\
:root {
  --fg: #1d1d1f;
  --bg: #ffffff;
  --muted: #6e6e73;
  --card: #f5f5f7;
  --link: #0066cc;
  --code-bg: #f5f5f7;
  --border: #d2d2d7;
}

body {
  font-family: -apple-system, BlinkMacSystemFont, "SF Pro Text", "Helvetica Neue",
               Helvetica, Arial, sans-serif;
  color: var(--fg);
  background: var(--bg);
  margin: 0;
  line-height: 1.5;
}

a { color: var(--link); text-decoration: none; }
a:hover { text-decoration: underline; }

nav.hierarchy {
  border-bottom: 1px solid var(--border);
  padding: 0.75em 2em;
  font-size: 0.9em;
}
nav.hierarchy ol { list-style: none; margin: 0; padding: 0; }
nav.hierarchy li { display: inline; }
nav.hierarchy li + li::before { content: " / "; color: var(--muted); }

main { max-width: 980px; margin: 0 auto; padding: 2em; }

.eyebrow { color: var(--muted); font-size: 1.1em; margin-bottom: 0; }
h1.title { margin-top: 0.2em; font-size: 2.5em; }
.abstract { font-size: 1.3em; color: var(--fg); }

.declaration pre, pre.code-listing {
  background: var(--code-bg);
  border: 1px solid var(--border);
  border-radius: 8px;
  padding: 1em;
  overflow-x: auto;
}

code { font-family: "SF Mono", Menlo, Consolas, monospace; font-size: 0.95em; }

aside {
  background: var(--card);
  border-left: 4px solid var(--border);
  border-radius: 4px;
  margin: 1em 0;
  padding: 0.5em 1em;
}
aside.warning { border-color: #ff9500; }
aside.important { border-color: #ffcc00; }
aside.tip { border-color: #34c759; }
aside .label { font-weight: 600; margin-bottom: 0.25em; }

section.topics h3 { margin-bottom: 0.25em; }
section.topics ul { list-style: none; padding-left: 0; }
section.topics li { margin-bottom: 0.75em; }
section.topics li p { margin: 0.1em 0 0 0; color: var(--muted); }

img { max-width: 100%; }

ol.steps > li { margin-bottom: 1.5em; }
"""

__all__ = ['DEFAULT_STYLESHEET']
