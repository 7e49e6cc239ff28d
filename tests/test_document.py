"""Tests for mcp_discovery.update.document (render, splice and atomic write)."""

import pytest

from mcp_discovery.errors import (
    DiscoveryError,
    DocumentAccessError,
    MarkerNestingError,
    TargetFileNotFoundError,
    TemplateFileNotFoundError,
)
from mcp_discovery.models.options import Template, WriteOptions
from mcp_discovery.update.document import (
    RenderLocation,
    UpdateTemplateInfo,
    detect_render_markers,
    splice_content,
    update_document,
    write_atomically,
)


def _write(path, text):
    path.write_bytes(text.encode("utf-8"))
    return path


def _read(path):
    return path.read_bytes().decode("utf-8")


# ============================================================================
# splice_content()
# ============================================================================


class TestSpliceContent:
    """Tests for replacing block interiors in a line list."""

    def test_interior_replaced_markers_kept(self):
        info = UpdateTemplateInfo(
            content="a\n<!-- start -->\nold\n<!-- end -->\nz\n",
            line_ending="\n",
            render_locations=[RenderLocation(2, 4, "new 1\nnew 2")],
        )
        assert splice_content(info) == "a\n<!-- start -->\nnew 1\nnew 2\n<!-- end -->\nz\n"

    def test_back_to_front_matches_forward_rebuild(self):
        lines = [f"line {i}" for i in range(1, 13)]
        content = "\n".join(lines) + "\n"
        locations = [
            RenderLocation(2, 5, "A1\nA2\nA3\nA4\nA5"),
            RenderLocation(7, 8, "B"),
            RenderLocation(9, 12, ""),
        ]
        info = UpdateTemplateInfo(content=content, line_ending="\n", render_locations=locations)

        # forward rebuild from the original indices
        expected = []
        cursor = 0
        for loc in locations:
            expected.extend(lines[cursor:loc.start_line])
            expected.extend(loc.rendered_template.split("\n") if loc.rendered_template else [])
            cursor = loc.end_line - 1
        expected.extend(lines[cursor:])

        assert splice_content(info) == "\n".join(expected) + "\n"

    def test_no_trailing_newline_is_preserved(self):
        info = UpdateTemplateInfo(
            content="s\nold\ne",
            line_ending="\n",
            render_locations=[RenderLocation(1, 3, "new")],
        )
        assert splice_content(info) == "s\nnew\ne"

    def test_crlf_used_for_rendered_lines(self):
        info = UpdateTemplateInfo(
            content="s\r\nold\r\ne\r\n",
            line_ending="\r\n",
            render_locations=[RenderLocation(1, 3, "x\ny")],
        )
        assert splice_content(info) == "s\r\nx\r\ny\r\ne\r\n"


# ============================================================================
# update_document()
# ============================================================================


class TestUpdateDocument:
    """End-to-end updates of files on disk."""

    def test_block_rendered_rest_untouched(self, tmp_path, server_info):
        target = _write(tmp_path / "README.md", (
            "# Title\n"
            "  keep   this  \n"
            "<!-- mcp-discovery-render -->\n"
            "old 1\n"
            "old 2\n"
            "<!-- mcp-discovery-render-end -->\n"
            "footer\n"
        ))
        options = WriteOptions(filename=target, template_string="{{ name }} v{{ version }}")

        info = update_document(options, server_info)

        assert [loc.render_location for loc in info.render_locations] == [(3, 6)]
        assert _read(target) == (
            "# Title\n"
            "  keep   this  \n"
            "<!-- mcp-discovery-render -->\n"
            "example-server v1.2.0\n"
            "<!-- mcp-discovery-render-end -->\n"
            "footer\n"
        )

    def test_crlf_file_stays_crlf(self, tmp_path, server_info):
        target = _write(tmp_path / "notes.txt", (
            "head\r\n"
            "mcp-discovery-render\r\n"
            "mcp-discovery-render-end\r\n"
            "tail\r\n"
        ))
        options = WriteOptions(filename=target, template_string="{{ name }}\n{{ version }}")

        update_document(options, server_info)

        assert _read(target) == (
            "head\r\n"
            "mcp-discovery-render\r\n"
            "example-server\r\n"
            "1.2.0\r\n"
            "mcp-discovery-render-end\r\n"
            "tail\r\n"
        )

    def test_multiple_blocks(self, tmp_path, server_info):
        target = _write(tmp_path / "doc.txt", (
            "mcp-discovery-render\n"
            "x\n"
            "mcp-discovery-render-end\n"
            "between\n"
            "mcp-discovery-render\n"
            "y\n"
            "y\n"
            "mcp-discovery-render-end\n"
        ))
        update_document(WriteOptions(filename=target, template_string="{{ name }}"), server_info)

        assert _read(target) == (
            "mcp-discovery-render\n"
            "example-server\n"
            "mcp-discovery-render-end\n"
            "between\n"
            "mcp-discovery-render\n"
            "example-server\n"
            "mcp-discovery-render-end\n"
        )

    def test_inline_template_is_kept_and_rerun_is_stable(self, tmp_path, server_info):
        target = _write(tmp_path / "README.md", (
            "mcp-discovery-render\n"
            "mcp-discovery-template\n"
            "Server: {{ name }}\n"
            "mcp-discovery-template-end\n"
            "mcp-discovery-render-end\n"
        ))
        expected = (
            "mcp-discovery-render\n"
            "mcp-discovery-template\n"
            "Server: {{ name }}\n"
            "mcp-discovery-template-end\n"
            "Server: example-server\n"
            "mcp-discovery-render-end\n"
        )

        update_document(WriteOptions(filename=target), server_info)
        assert _read(target) == expected

        update_document(WriteOptions(filename=target), server_info)
        assert _read(target) == expected

    def test_inline_template_survives_cli_template_string(self, tmp_path, server_info):
        target = _write(tmp_path / "README.md", (
            "mcp-discovery-render\n"
            "mcp-discovery-template\n"
            "Server: {{ name }}\n"
            "mcp-discovery-template-end\n"
            "mcp-discovery-render-end\n"
            "mcp-discovery-render\n"
            "old\n"
            "mcp-discovery-render-end\n"
        ))

        update_document(WriteOptions(filename=target, template_string="CLI"), server_info)

        assert _read(target) == (
            "mcp-discovery-render\n"
            "mcp-discovery-template\n"
            "Server: {{ name }}\n"
            "mcp-discovery-template-end\n"
            "Server: example-server\n"
            "mcp-discovery-render-end\n"
            "mcp-discovery-render\n"
            "CLI\n"
            "mcp-discovery-render-end\n"
        )

    def test_builtin_template_from_marker(self, tmp_path, server_info):
        target = _write(tmp_path / "README.md", (
            "<!-- mcp-discovery-render template=txt -->\n"
            "<!-- mcp-discovery-render-end -->\n"
        ))
        update_document(WriteOptions(filename=target), server_info)

        content = _read(target)
        assert content.startswith("<!-- mcp-discovery-render template=txt -->\nexample-server 1.2.0\n")
        assert content.endswith("<!-- mcp-discovery-render-end -->\n")

    def test_cli_template_overrides_extension(self, tmp_path, server_info):
        target = _write(tmp_path / "README.md", "mcp-discovery-render\nmcp-discovery-render-end\n")
        update_document(WriteOptions(filename=target, template=Template.HTML), server_info)
        assert "<h1>example-server 1.2.0</h1>" in _read(target)

    def test_template_file_relative_to_target(self, tmp_path, server_info):
        docs = tmp_path / "docs"
        docs.mkdir()
        (docs / "custom.j2").write_text("custom {{ version }}", encoding="utf-8")
        target = _write(docs / "README.md", (
            "<!-- mcp-discovery-render template-file=custom.j2 -->\n"
            "<!-- mcp-discovery-render-end -->\n"
        ))

        update_document(WriteOptions(filename=target), server_info)

        assert _read(target) == (
            "<!-- mcp-discovery-render template-file=custom.j2 -->\n"
            "custom 1.2.0\n"
            "<!-- mcp-discovery-render-end -->\n"
        )

    def test_dangling_inline_template_is_reported(self, tmp_path, server_info):
        target = _write(tmp_path / "doc.txt", (
            "mcp-discovery-render\n"
            "mcp-discovery-template\n"
            "a\n"
            "mcp-discovery-template-end\n"
            "mcp-discovery-template\n"
            "b\n"
            "mcp-discovery-template-end\n"
            "mcp-discovery-render-end\n"
        ))
        info = update_document(WriteOptions(filename=target), server_info)
        assert len(info.warnings) == 1


# ============================================================================
# Failures leave the file alone
# ============================================================================


class TestUpdateFailures:
    """A failed update must not modify the target."""

    def test_missing_target(self, tmp_path, server_info):
        with pytest.raises(TargetFileNotFoundError, match="not found"):
            update_document(WriteOptions(filename=tmp_path / "missing.md"), server_info)

    def test_nesting_error_writes_nothing(self, tmp_path, server_info):
        original = (
            "mcp-discovery-render\n"
            "old\n"
            "mcp-discovery-render-end\n"
            "mcp-discovery-template-end\n"
        )
        target = _write(tmp_path / "doc.txt", original)

        with pytest.raises(MarkerNestingError):
            update_document(WriteOptions(filename=target, template_string="new"), server_info)
        assert _read(target) == original

    def test_missing_template_file_writes_nothing(self, tmp_path, server_info):
        original = (
            "mcp-discovery-render\n"
            "old\n"
            "mcp-discovery-render-end\n"
            "mcp-discovery-render template-file=nope.j2\n"
            "mcp-discovery-render-end\n"
        )
        target = _write(tmp_path / "doc.txt", original)

        with pytest.raises(TemplateFileNotFoundError):
            update_document(WriteOptions(filename=target, template_string="new"), server_info)
        assert _read(target) == original

    def test_non_utf8_target(self, tmp_path, server_info):
        target = tmp_path / "latin1.md"
        original = b"\xff\xfe mcp-discovery-render\nold\nmcp-discovery-render-end\n"
        target.write_bytes(original)

        with pytest.raises(DiscoveryError, match="Unable to read file") as exc:
            update_document(WriteOptions(filename=target, template_string="new"), server_info)
        assert isinstance(exc.value, DocumentAccessError)
        assert isinstance(exc.value.__cause__, UnicodeDecodeError)
        assert target.read_bytes() == original

    def test_detect_does_not_write(self, tmp_path, server_info):
        original = "mcp-discovery-render\nold\nmcp-discovery-render-end\n"
        target = _write(tmp_path / "doc.txt", original)

        info = detect_render_markers(WriteOptions(filename=target, template_string="new"), server_info)

        assert info.render_locations[0].rendered_template == "new"
        assert _read(target) == original


class TestWriteAtomically:
    """Tests for the temp-file-then-replace writer."""

    def test_creates_and_replaces(self, tmp_path):
        target = tmp_path / "out.txt"
        write_atomically(target, "one\r\n")
        assert _read(target) == "one\r\n"
        write_atomically(target, "two")
        assert _read(target) == "two"
        assert [p.name for p in tmp_path.iterdir()] == ["out.txt"]

    def test_missing_directory(self, tmp_path):
        target = tmp_path / "no-such-dir" / "out.txt"
        with pytest.raises(DocumentAccessError, match="Unable to write file") as exc:
            write_atomically(target, "x")
        assert isinstance(exc.value.__cause__, OSError)
