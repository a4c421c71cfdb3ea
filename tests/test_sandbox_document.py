"""
Tests for sandbox document assembly and the component stand-in table.
"""
import json
import logging
import re

import pytest

from config.component_library import (
    COMPONENT_STAND_INS,
    GENERIC_STAND_IN,
    get_stand_in,
    get_supported_component_names,
    is_supported_component,
)
from services.fallback_component import generate_fallback_component
from services.sandbox_document import (
    IFRAME_SANDBOX,
    REACT_URL,
    build_sandbox_config,
    build_sandbox_document,
    build_scope_bindings,
)

SOURCE = '''"use client"

import { useState } from "react"
import { Button } from "@/components/ui/button"
import { FancyChart } from "@/components/ui/fancy-chart"
import { Mail } from "lucide-react"

export default function Inbox() {
  const [open, setOpen] = useState(false)
  return <Button onClick={() => setOpen(!open)}><Mail /> <FancyChart /></Button>
}
'''


def _embedded_config(document):
    match = re.search(r"window\.SANDBOX_CONFIG = (.*?);\n</script>", document, re.DOTALL)
    assert match is not None
    return json.loads(match.group(1))


class TestComponentLibrary:

    def test_known_component_has_stand_in(self):
        assert is_supported_component("Card")
        assert get_stand_in("Button")["tag"] == "button"

    def test_unknown_component_gets_generic_stand_in(self):
        assert not is_supported_component("FancyChart")
        assert get_stand_in("FancyChart") == GENERIC_STAND_IN

    def test_table_is_read_only(self):
        with pytest.raises(TypeError):
            COMPONENT_STAND_INS["Card"] = {"tag": "span", "class_name": ""}

    def test_supported_names_sorted(self):
        names = get_supported_component_names()
        assert names == sorted(names)
        assert "CardTitle" in names


class TestScopeBindings:

    def test_imports_bind_to_expected_kinds(self):
        bindings = {b["name"]: b for b in build_scope_bindings(SOURCE)}
        assert bindings["Button"]["kind"] == "component"
        assert bindings["FancyChart"] == {"name": "FancyChart", "kind": "component", "target": "FancyChart"}
        assert bindings["Mail"]["kind"] == "icon"
        assert bindings["useState"]["kind"] == "react"

    def test_library_is_always_in_scope(self):
        names = {b["name"] for b in build_scope_bindings("export function Empty() {}")}
        assert "Card" in names
        assert "useEffect" in names
        assert "React" in names

    def test_import_without_stand_in_is_logged(self, caplog):
        with caplog.at_level(logging.INFO, logger="services.sandbox_document"):
            build_scope_bindings(SOURCE)
        messages = [r.getMessage() for r in caplog.records if "No stand-in" in r.getMessage()]
        assert len(messages) == 1
        assert "FancyChart" in messages[0]


class TestSandboxConfig:

    def test_component_name_resolved_from_source(self):
        config = build_sandbox_config(SOURCE)
        assert config["componentName"] == "Inbox"
        assert "import" not in config["source"]
        assert config["source"].startswith("function Inbox()")

    def test_explicit_component_name_wins(self):
        assert build_sandbox_config(SOURCE, "Other")["componentName"] == "Other"

    def test_invalid_component_name_is_ignored(self):
        assert build_sandbox_config(SOURCE, "not valid;")["componentName"] == "Inbox"

    def test_stand_ins_come_from_the_library_table(self):
        stand_ins = build_sandbox_config(SOURCE)["standIns"]
        assert list(stand_ins) == get_supported_component_names()
        assert stand_ins["Button"] == dict(get_stand_in("Button"))
        assert "FancyChart" not in stand_ins


class TestSandboxDocument:

    def test_document_loads_runtime_libraries(self):
        document = build_sandbox_document(SOURCE)
        assert document.startswith("<!DOCTYPE html>")
        assert REACT_URL in document
        assert "Babel" in document
        assert "__SANDBOX_STATUS__" in document

    def test_embedded_config_round_trips(self):
        config = _embedded_config(build_sandbox_document(SOURCE))
        assert config["componentName"] == "Inbox"
        assert "Card" in config["standIns"]

    def test_script_breakout_is_escaped(self):
        source = 'export function X() { return <div>{"</script><script>alert(1)</script>"}</div> }'
        document = build_sandbox_document(source)
        config_block = document.split("window.SANDBOX_CONFIG = ", 1)[1].split("\n</script>", 1)[0]
        assert "</script>" not in config_block
        assert _embedded_config(document)["source"].endswith("</div> }")

    def test_banner_is_escaped(self):
        document = build_sandbox_document(SOURCE, banner="<b>pricing</b> card")
        assert "&lt;b&gt;pricing&lt;/b&gt; card" in document
        assert "<b>pricing</b>" not in document

    def test_fallback_component_assembles(self):
        document = build_sandbox_document(generate_fallback_component("a pricing card", "boom"))
        assert _embedded_config(document)["componentName"] == "GeneratedComponent"


def test_iframe_sandbox_allows_scripts_only():
    assert IFRAME_SANDBOX == "allow-scripts"
