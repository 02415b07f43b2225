import json

import pytest

from packgen.cli import build_parser, main

MODEL = {
    "name": "aws",
    "files": {
        "s3/bucket.go": [
            {"kind": "resource", "name": "Bucket", "fields": [
                {"name": "Name", "type": "string"},
                {"name": "Region", "type": "string", "options": {"optional": True}},
            ]},
        ],
    },
}


@pytest.fixture
def model(tmp_path):
    path = tmp_path / "package.json"
    path.write_text(json.dumps(MODEL))
    return path


def test_parser_defaults():
    args = build_parser().parse_args(["package.json"])
    assert args.model_file == "package.json"
    assert args.output_dir == "generated"
    assert args.base_module == "@coconut/coconut"
    assert args.keep_going is False


def test_main_generates_files(tmp_path, model, capsys):
    out = tmp_path / "out"
    assert main([str(model), "-o", str(out)]) == 0

    content = (out / "s3" / "bucket.ts").read_text()
    assert "export class Bucket extends coconut.Resource implements BucketArgs {" in content
    assert "    region?: string;" in content
    assert "Generated 1 file(s)" in capsys.readouterr().out


def test_main_accepts_model_flag(tmp_path, model):
    out = tmp_path / "out"
    assert main(["--model", str(model), "-o", str(out), "--base-alias", "acme",
                 "--base-module", "@acme/runtime"]) == 0
    assert 'import * as acme from "@acme/runtime";' in (out / "s3" / "bucket.ts").read_text()


def test_main_requires_a_model():
    with pytest.raises(SystemExit):
        main([])


def test_main_reports_bad_models(tmp_path):
    path = tmp_path / "package.json"
    path.write_text("[]")
    assert main([str(path), "-o", str(tmp_path / "out")]) == 2
    assert main([str(tmp_path / "missing.json")]) == 2

    latin1 = tmp_path / "latin1.json"
    latin1.write_bytes(b'{"name": "\xff"}')
    assert main([str(latin1), "-o", str(tmp_path / "out")]) == 2

    no_fields = tmp_path / "no_fields.json"
    no_fields.write_text(json.dumps({"name": "p", "files": {"a.go": [
        {"kind": "resource", "name": "R", "fields": None},
    ]}}))
    assert main([str(no_fields), "-o", str(tmp_path / "out")]) == 2


def test_main_reports_contract_errors(tmp_path):
    path = tmp_path / "package.json"
    path.write_text(json.dumps({"name": "p", "files": {"a.go": [
        {"kind": "enum", "name": "E", "values": []},
    ]}}))
    assert main([str(path), "-o", str(tmp_path / "out")]) == 2


def test_main_keep_going(tmp_path, model):
    out = tmp_path / "out"
    (out / "s3" / "bucket.ts").mkdir(parents=True)
    assert main([str(model), "-o", str(out), "-k"]) == 1
    assert main([str(model), "-o", str(out)]) == 1
