# mcp_discovery/rendering/templates.py
"""
Built-in Jinja2 templates and the partials they include.

Layout rule for these strings: the environment runs with trim_blocks and
lstrip_blocks, so a block tag either sits alone on its line or is followed by
more text on the same line. Conditional suffixes at the end of a line are
written as inline expressions.
"""
from __future__ import annotations

from typing import Dict


# ---- markdown (tables) ---------------------------------------------------------

MD_SUMMARY = """\
| {{ capability_tag("Tools", capabilities.tools, tools|length if tools else none) }} \
| {{ capability_tag("Prompts", capabilities.prompts, prompts|length if prompts else none) }} \
| {{ capability_tag("Resources", capabilities.resources, resources|length if resources else none) }} |
| --- | --- | --- |
| {{ capability_tag("Logging", capabilities.logging) }} \
| {{ capability_tag("Experimental", capabilities.experimental) }} | |
"""

MD_TOOLS = """\
## 🛠️ Tools ({{ tools|length }})

| Tool Name | Description | Inputs |
| --- | --- | --- |
{% for tool in tools %}
| {{ loop.index }}. **{{ tool.name }}** \
| {{ format_text(tool.description, "<br>", "``") }} \
| {% for p in tool.params %}<code>{{ p.param_name }}</code> : {{ tool_param_type(p.param_type) }}\
{{ "<sup>*</sup>" if p.required else "" }}{{ "" if loop.last else "<br>" }}{% endfor %} |
{% endfor %}
"""

MD_PROMPTS = """\
## 📝 Prompts ({{ prompts|length }})

| Prompt Name | Description | Arguments |
| --- | --- | --- |
{% for prompt in prompts %}
| {{ loop.index }}. **{{ prompt.name }}** \
| {{ format_text(prompt.description, "<br>", "``") }} \
| {% for a in prompt.arguments %}<code>{{ a.name }}</code>{{ "<sup>*</sup>" if a.required else "" }}\
{{ "" if loop.last else "<br>" }}{% endfor %} |
{% endfor %}
"""

MD_RESOURCES = """\
## 📄 Resources ({{ resources|length }})

| Resource Name | Uri | Description |
| --- | --- | --- |
{% for resource in resources %}
| {{ loop.index }}. **{{ resource.name }}** \
| <code>{{ resource.uri }}</code>{{ " <sup>(" ~ resource.mime_type ~ ")</sup>" if resource.mime_type else "" }} \
| {{ format_text(resource.description, "<br>", "``") }} |
{% endfor %}
"""

MD_RESOURCE_TEMPLATES = """\
## 🧩 Resource Templates ({{ resource_templates|length }})

| Template Name | Uri Template | Description |
| --- | --- | --- |
{% for rt in resource_templates %}
| {{ loop.index }}. **{{ rt.name }}** \
| <code>{{ rt.uri_template }}</code>{{ " <sup>(" ~ rt.mime_type ~ ")</sup>" if rt.mime_type else "" }} \
| {{ format_text(rt.description, "<br>", "``") }} |
{% endfor %}
"""

TEMPLATE_MARKDOWN = """\
# {{ name }} {{ version }}

{% include "md-summary" %}
{% if tools %}

{% include "md-tools" %}
{% endif %}
{% if prompts %}

{% include "md-prompts" %}
{% endif %}
{% if resources %}

{% include "md-resources" %}
{% endif %}
{% if resource_templates %}

{% include "md-resource-templates" %}
{% endif %}
"""

# ---- markdown (plain lists) ----------------------------------------------------

MD_PLAIN_TOOLS = """\
## 🛠️ Tools ({{ tools|length }})

{% for tool in tools %}
- **{{ tool.name }}**{{ " - " ~ format_text(tool.description, " ") if tool.description else "" }}
{% for p in tool.params %}
  - `{{ p.param_name }}` : {{ tool_param_type(p.param_type) }}{{ " (required)" if p.required else "" }}\
{{ " - " ~ p.param_description if p.param_description else "" }}
{% endfor %}
{% endfor %}
"""

MD_PLAIN_PROMPTS = """\
## 📝 Prompts ({{ prompts|length }})

{% for prompt in prompts %}
- **{{ prompt.name }}**{{ " - " ~ format_text(prompt.description, " ") if prompt.description else "" }}
{% for a in prompt.arguments %}
  - `{{ a.name }}`{{ " (required)" if a.required else "" }}{{ " - " ~ a.description if a.description else "" }}
{% endfor %}
{% endfor %}
"""

MD_PLAIN_RESOURCES = """\
## 📄 Resources ({{ resources|length }})

{% for resource in resources %}
- **{{ resource.name }}** - `{{ resource.uri }}`{{ " (" ~ resource.mime_type ~ ")" if resource.mime_type else "" }}
{% if resource.description %}
  - {{ format_text(resource.description, " ") }}
{% endif %}
{% endfor %}
"""

MD_PLAIN_RESOURCE_TEMPLATES = """\
## 🧩 Resource Templates ({{ resource_templates|length }})

{% for rt in resource_templates %}
- **{{ rt.name }}** - `{{ rt.uri_template }}`{{ " (" ~ rt.mime_type ~ ")" if rt.mime_type else "" }}
{% if rt.description %}
  - {{ format_text(rt.description, " ") }}
{% endif %}
{% endfor %}
"""

TEMPLATE_MARKDOWN_PLAIN = """\
# {{ name }} {{ version }}

- {{ capability("Tools", capabilities.tools, tools|length if tools else none) }}
- {{ capability("Prompts", capabilities.prompts, prompts|length if prompts else none) }}
- {{ capability("Resources", capabilities.resources, resources|length if resources else none) }}
- {{ capability("Logging", capabilities.logging) }}
- {{ capability("Experimental", capabilities.experimental) }}
{% if tools %}

{% include "md-plain-tools" %}
{% endif %}
{% if prompts %}

{% include "md-plain-prompts" %}
{% endif %}
{% if resources %}

{% include "md-plain-resources" %}
{% endif %}
{% if resource_templates %}

{% include "md-plain-resource-templates" %}
{% endif %}
"""

# ---- html ----------------------------------------------------------------------

HTML_SUMMARY = """\
<table class="mcp-summary">
  <tr>
    <td>{{ capability_tag("Tools", capabilities.tools, tools|length if tools else none) }}</td>
    <td>{{ capability_tag("Prompts", capabilities.prompts, prompts|length if prompts else none) }}</td>
    <td>{{ capability_tag("Resources", capabilities.resources, resources|length if resources else none) }}</td>
  </tr>
  <tr>
    <td>{{ capability_tag("Logging", capabilities.logging) }}</td>
    <td>{{ capability_tag("Experimental", capabilities.experimental) }}</td>
    <td></td>
  </tr>
</table>
"""

HTML_TOOLS = """\
<h2>🛠️ Tools ({{ tools|length }})</h2>
<table class="mcp-tools">
  <tr><th>Tool Name</th><th>Description</th><th>Inputs</th></tr>
{% for tool in tools %}
  <tr>
    <td>{{ loop.index }}. <b>{{ tool.name|e }}</b></td>
    <td>{{ format_text(tool.description|default("", true)|e, "<br>", "``") }}</td>
    <td>
{% for p in tool.params %}
      <code>{{ p.param_name|e }}</code> : {{ tool_param_type(p.param_type)|e }}{{ "<sup>*</sup>" if p.required else "" }}<br>
{% endfor %}
    </td>
  </tr>
{% endfor %}
</table>
"""

HTML_PROMPTS = """\
<h2>📝 Prompts ({{ prompts|length }})</h2>
<table class="mcp-prompts">
  <tr><th>Prompt Name</th><th>Description</th><th>Arguments</th></tr>
{% for prompt in prompts %}
  <tr>
    <td>{{ loop.index }}. <b>{{ prompt.name|e }}</b></td>
    <td>{{ format_text(prompt.description|default("", true)|e, "<br>", "``") }}</td>
    <td>
{% for a in prompt.arguments %}
      <code>{{ a.name|e }}</code>{{ "<sup>*</sup>" if a.required else "" }}<br>
{% endfor %}
    </td>
  </tr>
{% endfor %}
</table>
"""

HTML_RESOURCES = """\
<h2>📄 Resources ({{ resources|length }})</h2>
<table class="mcp-resources">
  <tr><th>Resource Name</th><th>Uri</th><th>Description</th></tr>
{% for resource in resources %}
  <tr>
    <td>{{ loop.index }}. <b>{{ resource.name|e }}</b></td>
    <td><code>{{ resource.uri|e }}</code>{{ (" <sup>(" ~ resource.mime_type|e ~ ")</sup>") if resource.mime_type else "" }}</td>
    <td>{{ format_text(resource.description|default("", true)|e, "<br>", "``") }}</td>
  </tr>
{% endfor %}
</table>
"""

HTML_RESOURCE_TEMPLATES = """\
<h2>🧩 Resource Templates ({{ resource_templates|length }})</h2>
<table class="mcp-resource-templates">
  <tr><th>Template Name</th><th>Uri Template</th><th>Description</th></tr>
{% for rt in resource_templates %}
  <tr>
    <td>{{ loop.index }}. <b>{{ rt.name|e }}</b></td>
    <td><code>{{ rt.uri_template|e }}</code>{{ (" <sup>(" ~ rt.mime_type|e ~ ")</sup>") if rt.mime_type else "" }}</td>
    <td>{{ format_text(rt.description|default("", true)|e, "<br>", "``") }}</td>
  </tr>
{% endfor %}
</table>
"""

TEMPLATE_HTML = """\
<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <title>{{ name|e }} {{ version|e }}</title>
</head>
<body>
<h1>{{ name|e }} {{ version|e }}</h1>
{% include "html-summary" %}
{% if tools %}
{% include "html-tools" %}
{% endif %}
{% if prompts %}
{% include "html-prompts" %}
{% endif %}
{% if resources %}
{% include "html-resources" %}
{% endif %}
{% if resource_templates %}
{% include "html-resource-templates" %}
{% endif %}
</body>
</html>
"""

# ---- plain text ----------------------------------------------------------------

TEXT_SUMMARY = """\
{{ capability("Tools", capabilities.tools, tools|length if tools else none) }}    \
{{ capability("Prompts", capabilities.prompts, prompts|length if prompts else none) }}    \
{{ capability("Resources", capabilities.resources, resources|length if resources else none) }}
{{ capability("Logging", capabilities.logging) }}    {{ capability("Experimental", capabilities.experimental) }}
"""

TEXT_TOOLS = """\
{{ capability_title("Tools", tools|length, true) }}
{% for tool in tools %}
{{ loop.index }}. {{ tool.name }}{{ ": " ~ format_text(tool.description, " ") if tool.description else "" }}
{% for p in tool.params %}
   - {{ p.param_name }} : {{ tool_param_type(p.param_type) }}{{ " (required)" if p.required else "" }}
{% endfor %}
{% endfor %}
"""

TEXT_PROMPTS = """\
{{ capability_title("Prompts", prompts|length, true) }}
{% for prompt in prompts %}
{{ loop.index }}. {{ prompt.name }}{{ ": " ~ format_text(prompt.description, " ") if prompt.description else "" }}
{% for a in prompt.arguments %}
   - {{ a.name }}{{ " (required)" if a.required else "" }}
{% endfor %}
{% endfor %}
"""

TEXT_RESOURCES = """\
{{ capability_title("Resources", resources|length, true) }}
{% for resource in resources %}
{{ loop.index }}. {{ resource.name }}: {{ resource.uri }}{{ " (" ~ resource.mime_type ~ ")" if resource.mime_type else "" }}
{% if resource.description %}
   {{ format_text(resource.description, " ") }}
{% endif %}
{% endfor %}
"""

TEXT_RESOURCE_TEMPLATES = """\
{{ capability_title("Resource Templates", resource_templates|length, true) }}
{% for rt in resource_templates %}
{{ loop.index }}. {{ rt.name }}: {{ rt.uri_template }}{{ " (" ~ rt.mime_type ~ ")" if rt.mime_type else "" }}
{% if rt.description %}
   {{ format_text(rt.description, " ") }}
{% endif %}
{% endfor %}
"""

TEMPLATE_TEXT = """\
{{ underline(name ~ " " ~ version) }}

{% include "txt-summary" %}
{% if tools %}

{% include "txt-tools" %}
{% endif %}
{% if prompts %}

{% include "txt-prompts" %}
{% endif %}
{% if resources %}

{% include "txt-resources" %}
{% endif %}
{% if resource_templates %}

{% include "txt-resource-templates" %}
{% endif %}
"""

PARTIALS: Dict[str, str] = {
    "md-summary": MD_SUMMARY,
    "md-tools": MD_TOOLS,
    "md-prompts": MD_PROMPTS,
    "md-resources": MD_RESOURCES,
    "md-resource-templates": MD_RESOURCE_TEMPLATES,
    "md-plain-tools": MD_PLAIN_TOOLS,
    "md-plain-prompts": MD_PLAIN_PROMPTS,
    "md-plain-resources": MD_PLAIN_RESOURCES,
    "md-plain-resource-templates": MD_PLAIN_RESOURCE_TEMPLATES,
    "html-summary": HTML_SUMMARY,
    "html-tools": HTML_TOOLS,
    "html-prompts": HTML_PROMPTS,
    "html-resources": HTML_RESOURCES,
    "html-resource-templates": HTML_RESOURCE_TEMPLATES,
    "txt-summary": TEXT_SUMMARY,
    "txt-tools": TEXT_TOOLS,
    "txt-prompts": TEXT_PROMPTS,
    "txt-resources": TEXT_RESOURCES,
    "txt-resource-templates": TEXT_RESOURCE_TEMPLATES,
}
