"""
Tests for the textchain-train command line tool.
"""
import json

from textchain.cli import main, parse_args


class TestParseArgs:
    def test_defaults(self, corpus_path):
        args = parse_args(["--corpus", str(corpus_path)])

        assert args.order == 2
        assert args.dictionary == "ShortHashArrayCodingDictionary"
        assert args.count == 3
        assert not args.whole_text


class TestMain:
    def test_train_and_generate(self, corpus_path, capsys):
        code = main(["--corpus", str(corpus_path), "--count", "2", "--length", "40", "--seed", "1", "--stats"])

        out = capsys.readouterr().out
        assert code == 0
        assert "Markov chain with" in out
        assert "--- Sample 1" in out
        assert "--- Sample 2" in out

    def test_save_and_load(self, corpus_path, tmp_path, capsys):
        saved = tmp_path / "models" / "chain.json"

        assert main(["--corpus", str(corpus_path), "--order", "1", "--count", "0", "--save", str(saved)]) == 0
        assert json.loads(saved.read_text(encoding="utf-8"))["order"] == 1

        assert main(["--load", str(saved), "--count", "1", "--length", "20"]) == 0
        assert "--- Sample 1" in capsys.readouterr().out

    def test_whole_text_mode(self, corpus_path):
        assert main(["--corpus", str(corpus_path), "--whole-text", "--count", "1", "--length", "10"]) == 0

    def test_missing_corpus(self, tmp_path, capsys):
        code = main(["--corpus", str(tmp_path / "missing.txt")])

        assert code == 1
        assert "Could not build chain" in capsys.readouterr().err

    def test_empty_corpus(self, tmp_path, capsys):
        empty = tmp_path / "empty.txt"
        empty.write_text("\n\n", encoding="utf-8")

        assert main(["--corpus", str(empty)]) == 1
        assert "no tokens" in capsys.readouterr().err
