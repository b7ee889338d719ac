"""CLI tests: quill compile / tokens / ast."""

import json

import pytest

from quill.cli import main


def _run(argv):
    with pytest.raises(SystemExit) as exc:
        main(argv)
    return exc.value.code


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def hello(workdir):
    path = workdir / "hello.ql"
    path.write_text("println('hello')\n")
    return path


class TestCompileCommand:
    """quill compile writes canonical text to stdout or a file."""

    def test_stdout(self, hello, capsys):
        assert _run(["compile", str(hello)]) == 0
        assert capsys.readouterr().out == 'println("hello")\n'

    def test_output_file(self, hello, workdir, capsys):
        out = workdir / "out.ql"
        assert _run(["compile", str(hello), "-o", str(out)]) == 0
        assert out.read_text() == 'println("hello")\n'
        status = json.loads(capsys.readouterr().out)
        assert status == {"status": "compiled", "path": str(out)}

    def test_llvm_target(self, hello, capsys):
        assert _run(["compile", str(hello), "--target", "llvm"]) == 0
        assert "printf" in capsys.readouterr().out

    def test_missing_file(self, workdir, capsys):
        assert _run(["compile", "nope.ql"]) == 1
        assert json.loads(capsys.readouterr().out) == {"error": "File not found: nope.ql"}

    def test_compile_error_is_json(self, workdir, capsys):
        bad = workdir / "bad.ql"
        bad.write_text("1abc()")
        assert _run(["compile", str(bad)]) == 1
        [error] = json.loads(capsys.readouterr().out)
        assert error["kind"] == "unexpected_char"
        assert error["location"]["offset"] == 0

    def test_config_quote(self, hello, workdir, capsys):
        (workdir / ".quillrc.yml").write_text("quote: \"'\"\n")
        assert _run(["compile", str(hello)]) == 0
        assert capsys.readouterr().out == "println('hello')\n"

    def test_flag_overrides_config_target(self, hello, workdir, capsys):
        (workdir / ".quillrc.yml").write_text("target: llvm\n")
        assert _run(["compile", str(hello), "--target", "text"]) == 0
        assert capsys.readouterr().out == 'println("hello")\n'

    def test_invalid_config(self, hello, workdir, capsys):
        (workdir / ".quillrc.yml").write_text("target: wasm\n")
        assert _run(["compile", str(hello)]) == 1
        assert "Invalid config" in json.loads(capsys.readouterr().out)["error"]

    def test_explicit_config_path(self, hello, workdir, capsys):
        cfg = workdir / "custom.json"
        cfg.write_text(json.dumps({"quote": "'"}))
        assert _run(["--config", str(cfg), "compile", str(hello)]) == 0
        assert capsys.readouterr().out == "println('hello')\n"


class TestInspectionCommands:
    """quill tokens / quill ast dump JSON."""

    def test_tokens(self, hello, capsys):
        assert _run(["tokens", str(hello)]) == 0
        tokens = json.loads(capsys.readouterr().out)
        assert [t["type"] for t in tokens] == ["IDENT", "LPAREN", "STRING_LIT", "RPAREN", "EOF"]

    def test_ast(self, hello, capsys):
        assert _run(["ast", str(hello)]) == 0
        tree = json.loads(capsys.readouterr().out)
        assert tree["statements"][0]["callee"] == "println"

    def test_ast_parse_error(self, workdir, capsys):
        bad = workdir / "bad.ql"
        bad.write_text("println(")
        assert _run(["ast", str(bad)]) == 1
        [error] = json.loads(capsys.readouterr().out)
        assert error["kind"] == "unexpected_eof"

    def test_no_command(self, workdir, capsys):
        assert _run([]) == 1


class TestObjectOutput:
    """quill compile --obj writes a native object file through LLVM."""

    def test_default_object_path(self, hello, workdir, capsys):
        assert _run(["compile", str(hello), "--obj"]) == 0
        obj = workdir / "hello.o"
        assert obj.exists()
        assert obj.stat().st_size > 0
        status = json.loads(capsys.readouterr().out)
        assert status == {"status": "object_emitted", "path": str(obj)}

    def test_output_prefix(self, hello, workdir, capsys):
        assert _run(["compile", str(hello), "--obj", "-o", str(workdir / "build")]) == 0
        assert (workdir / "build.o").stat().st_size > 0

    def test_reserved_callee_is_json_error(self, workdir, capsys):
        bad = workdir / "bad.ql"
        bad.write_text("main('x')")
        assert _run(["compile", str(bad), "--obj"]) == 1
        [error] = json.loads(capsys.readouterr().out)
        assert error["kind"] == "reserved_name"
        assert not (workdir / "bad.o").exists()
