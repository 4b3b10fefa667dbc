"""
Form producer — a sectioned create/edit form component.

Sections come from ``config.form.sections`` when present; otherwise all
visible fields go into a single section.  Section and field order
follow the config, then the declaration order of the field map.
"""

from __future__ import annotations

from typing import Any

from resourcegen.core.models.descriptor import FieldDescriptor, ResourceDescriptor
from resourcegen.core.services.producers.common import HEADER, jsx_text, ts_str, ts_value


def _sections(d: ResourceDescriptor) -> list[tuple[str, str | None, list[FieldDescriptor]]]:
    form = d.config.get("form")
    raw_sections: Any = form.get("sections") if isinstance(form, dict) else None
    visible = d.visible_fields()

    if not isinstance(raw_sections, list) or not raw_sections:
        return [("Details", None, visible)]

    sections: list[tuple[str, str | None, list[FieldDescriptor]]] = []
    for raw in raw_sections:
        if not isinstance(raw, dict):
            continue
        names = raw.get("fields") if isinstance(raw.get("fields"), list) else []
        fields = [f for f in (d.get_field(n) for n in names if isinstance(n, str)) if f and not f.hidden]
        desc = raw.get("description")
        sections.append((str(raw.get("title", "")), desc if isinstance(desc, str) else None, fields))
    return sections


def _field_props(f: FieldDescriptor) -> str:
    props = [
        f"name={ts_str(f.name)}",
        f"label={ts_str(f.label)}",
        f"inputType={ts_str(f.input_type)}",
    ]
    placeholder = f.metadata.get("placeholder")
    if isinstance(placeholder, str):
        props.append(f"placeholder={ts_str(placeholder)}")
    description = f.metadata.get("description")
    if isinstance(description, str):
        props.append(f"description={ts_str(description)}")
    if f.read_only:
        props.append("readOnly")
    if not f.is_optional:
        props.append("required")
    if f.enum_values:
        props.append(f"options={{{ts_value(f.enum_values)}}}")
    return " ".join(props)


def _field_jsx(f: FieldDescriptor) -> str:
    rel = f.relation
    if rel is not None:
        search = rel.get("searchFields")
        search_prop = f" searchFields={{{ts_value(search)}}}" if isinstance(search, list) else ""
        return (
            f"          <RelationCombobox form={{form}} name={ts_str(f.name)} label={ts_str(f.label)}"
            f" resource={ts_str(str(rel['resource']))} labelField={ts_str(str(rel.get('labelField', 'name')))}"
            f"{search_prop} />\n"
        )
    return f"          <FormField form={{form}} {_field_props(f)} />\n"


def produce_form(d: ResourceDescriptor) -> str:
    sections = _sections(d)
    body: list[str] = []
    for title, description, fields in sections:
        body.append("      <section className=\"flex flex-col gap-3\">\n")
        body.append(f"        <h3 className=\"font-medium\">{jsx_text(title)}</h3>\n")
        if description:
            body.append(f"        <p className=\"text-sm text-muted-foreground\">{jsx_text(description)}</p>\n")
        body.append("        <div className=\"grid gap-3 md:grid-cols-2\">\n")
        body.extend(_field_jsx(f) for f in fields)
        body.append("        </div>\n")
        body.append("      </section>\n")

    return (
        HEADER
        + "import { useForm } from '@tanstack/react-form'\n"
        "import { FormField } from '@/components/forms/_form-field'\n"
        "import { RelationCombobox } from '@/components/forms/_relation-combobox'\n"
        "import { Button } from '@/components/ui/button'\n"
        f"import {{ {d.var_name} }} from '@/schemas/{d.name}.schema'\n"
        f"import type {{ {d.type_name} }} from '@/collections/{d.plural_name}.collection'\n"
        "\n"
        f"type {d.type_name}FormProps = {{\n"
        f"  defaultValues?: Partial<{d.type_name}>\n"
        f"  onSubmit: (values: Partial<{d.type_name}>) => void\n"
        "}\n"
        "\n"
        f"export function {d.type_name}Form({{ defaultValues, onSubmit }}: {d.type_name}FormProps) {{\n"
        "  const form = useForm({\n"
        "    defaultValues: defaultValues ?? {},\n"
        f"    validators: {{ onSubmit: {d.var_name}.createSchema }},\n"
        "    onSubmit: ({ value }) => onSubmit(value),\n"
        "  })\n"
        "\n"
        "  return (\n"
        "    <form\n"
        "      className=\"flex flex-col gap-6\"\n"
        "      onSubmit={(e) => {\n"
        "        e.preventDefault()\n"
        "        form.handleSubmit()\n"
        "      }}\n"
        "    >\n"
        + "".join(body)
        + "      <Button type=\"submit\">Save</Button>\n"
        "    </form>\n"
        "  )\n"
        "}\n"
    )
