from __future__ import annotations

_COLORS = {
    "red": ("#f54a45", "#fde2e2", "#f76964"),
    "yellow": ("#de7802", "#fef1e1", "#ffba6b"),
    "green": ("#2ea121", "#e4f5e6", "#51c74f"),
    "blue": ("#245bdb", "#e1eaff", "#4e83fd"),
    "indigo": ("#1d3df2", "#e6e8ff", "#6c7cff"),
    "purple": ("#6425d0", "#efe6fe", "#9f6ff1"),
    "pink": ("#c71f85", "#fde2f0", "#f062b6"),
    "gray": ("#646a73", "#eff0f1", "#bbbfc4"),
}

_BASE_CSS = """
* { box-sizing: border-box; }
body {
  margin: 0;
  background: #ffffff;
  color: #1f2329;
  font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", "PingFang SC",
    "Hiragino Sans GB", "Microsoft YaHei", "Helvetica Neue", Arial, sans-serif;
  font-size: 16px;
  line-height: 1.75;
}
.feishu-document {
  max-width: 820px;
  margin: 0 auto;
  padding: 40px 24px 80px;
}
.text-block { margin: 8px 0; min-height: 1.75em; white-space: pre-wrap; word-break: break-word; }
.text-align-center { text-align: center; }
.text-align-right { text-align: right; }
.block-children { padding-left: 28px; }

.heading { font-weight: 600; margin: 24px 0 8px; line-height: 1.4; }
.heading-h1 { font-size: 28px; }
.heading-h2 { font-size: 24px; }
.heading-h3 { font-size: 20px; }
.heading-h4 { font-size: 18px; }
.heading-h5, .heading-h6, .heading-h7, .heading-h8, .heading-h9 { font-size: 16px; }
.heading-h7, .heading-h8, .heading-h9 { color: #646a73; }

.list-wrapper { margin: 4px 0; }
.list { display: flex; align-items: flex-start; }
.list .bullet, .list .order {
  flex: none;
  min-width: 22px;
  margin-right: 4px;
  color: #245bdb;
  text-align: right;
}
.list-content { flex: 1; min-width: 0; }
.list-content p { margin: 0; white-space: pre-wrap; }
.list-children { padding-left: 26px; }

.todo-block { margin: 4px 0; }
.todo-block_content { display: flex; align-items: flex-start; gap: 8px; }
.todo-block_content input { margin-top: 7px; }
.todo-done .todo-block_content span { color: #8f959e; text-decoration: line-through; }

blockquote, .quote-block, .quote-container-block {
  margin: 8px 0;
  padding: 0 0 0 14px;
  border-left: 2px solid #bbbfc4;
  color: #646a73;
}

.code-block {
  margin: 12px 0;
  border-radius: 6px;
  background: #f5f6f7;
  overflow-x: auto;
}
.code-block pre { margin: 0; padding: 16px; }
.code-block code { font-family: "SFMono-Regular", Consolas, "Liberation Mono", Menlo, monospace; font-size: 14px; }
code { padding: 0 4px; border-radius: 4px; background: #f2f3f5; font-size: 0.9em; }

.equation { margin: 12px 0; text-align: center; overflow-x: auto; }
hr.divider { margin: 16px 0; border: none; border-top: 1px solid #dee0e3; }

.callout-block {
  display: flex;
  gap: 8px;
  margin: 8px 0;
  padding: 12px 16px;
  border: 1px solid transparent;
  border-radius: 8px;
  background: #f5f6f7;
}
.callout-emoji-container { flex: none; font-size: 20px; line-height: 1.5; }
.callout-block-children { flex: 1; min-width: 0; }
.callout-block-children > :first-child { margin-top: 0; }
.callout-block-children > :last-child { margin-bottom: 0; }

.grid-layout { margin: 8px 0; }
.grid-column { min-width: 0; }

.table-block {
  width: 100%;
  margin: 12px 0;
  border-collapse: collapse;
  table-layout: fixed;
}
.table-block td, .table-block th {
  padding: 8px 12px;
  border: 1px solid #dee0e3;
  vertical-align: top;
  word-break: break-word;
}
.table-block th { background: #f5f6f7; font-weight: 600; text-align: left; }
.table-block td > :first-child, .table-block th > :first-child { margin-top: 0; }

.image-block { margin: 12px 0; text-align: center; }
.image-block img { max-width: 100%; height: auto; border-radius: 4px; }
.board-container { margin: 12px 0; overflow: hidden; }
.board-container img { max-width: 100%; }

.file-block { margin: 8px 0; }
.file-block a {
  display: inline-flex;
  align-items: center;
  gap: 6px;
  padding: 8px 12px;
  border: 1px solid #dee0e3;
  border-radius: 6px;
  color: #1f2329;
  text-decoration: none;
}
.diagram pre { padding: 12px; background: #f5f6f7; border-radius: 6px; overflow-x: auto; }

.embed-container { margin: 12px 0; border: 1px solid #dee0e3; border-radius: 8px; overflow: hidden; }
.embed-header { display: flex; gap: 6px; padding: 8px 12px; background: #f5f6f7; font-size: 14px; }
.embed-content iframe, iframe.embed-generic { display: block; width: 100%; min-height: 400px; border: none; }

a { color: #245bdb; text-decoration: none; }
a:hover { text-decoration: underline; }
.mention-user, .mention-doc { color: #245bdb; }
.reminder, .inline-file { padding: 0 4px; border-radius: 4px; background: #f2f3f5; }
.feishu-button {
  padding: 4px 12px;
  border: 1px solid #d0d3d6;
  border-radius: 6px;
  background: #ffffff;
  font-size: 14px;
}
.unsupported-block {
  margin: 8px 0;
  padding: 8px 12px;
  border: 1px dashed #d0d3d6;
  border-radius: 6px;
  color: #8f959e;
  font-size: 14px;
}
"""


def _color_css() -> str:
    rules = []
    for name, (text, background, border) in _COLORS.items():
        rules.append(f".text-{name} {{ color: {text}; }}")
        rules.append(f".bg-{name} {{ background-color: {background}; }}")
        rules.append(f".callout-{name} {{ background-color: {background}; }}")
        rules.append(f".callout-border-{name} {{ border-color: {border}; }}")
    return "\n".join(rules) + "\n"


FEISHU_CSS = _BASE_CSS.lstrip() + _color_css()


__all__ = ["FEISHU_CSS"]
