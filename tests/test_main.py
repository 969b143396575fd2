import json

import pandas as pd
import pytest

from rfp_bid_agent.main import main


@pytest.fixture(autouse=True)
def no_logging_setup(monkeypatch):
    # Root handlers would outlive capsys streams between tests
    monkeypatch.setattr("rfp_bid_agent.main.setup_logging", lambda *args, **kwargs: None)


@pytest.fixture
def specs_file(clean_env, sample_product_specs):
    path = clean_env / "specs.json"
    path.write_text(json.dumps([spec.to_dict() for spec in sample_product_specs]), encoding="utf-8")
    return path


class TestCLI:

    def test_no_command(self, clean_env):
        with pytest.raises(SystemExit) as exc:
            main([])
        assert exc.value.code == 1

    def test_match(self, specs_file, capsys):
        output = specs_file.parent / "matches.csv"

        main(["match", str(specs_file), "--top-n", "2", "-o", str(output)])

        out = capsys.readouterr().out
        assert "Loaded 2 products, catalog has 9 SKUs" in out
        assert "SKU-XLPE-11KV-A" in out
        assert "100%" in out
        assert pd.read_csv(output)["rank"].max() == 2

    def test_match_top_n_zero_is_rejected(self, specs_file, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["match", str(specs_file), "--top-n", "0"])

        captured = capsys.readouterr()
        assert exc.value.code == 1
        assert "top_n must be a positive integer, got 0" in captured.err
        assert "  1. " not in captured.out

    def test_invalid_config_exits_with_error(self, clean_env, monkeypatch, capsys):
        monkeypatch.setenv("TOP_N", "three")

        with pytest.raises(SystemExit) as exc:
            main(["catalog"])

        assert exc.value.code == 1
        assert "✗ Error:" in capsys.readouterr().err

    def test_match_missing_file(self, clean_env, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["match", str(clean_env / "nope.json")])

        assert exc.value.code == 1
        assert "✗ Error:" in capsys.readouterr().err

    def test_match_with_catalog_file(self, specs_file, monkeypatch, capsys):
        catalog = specs_file.parent / "catalog.csv"
        catalog.write_text(
            "sku,product_name,category,parameter,value,unit\n"
            "SKU-ONLY,Only Cable,Power Cables,Voltage Rating,11,kV\n",
            encoding="utf-8",
        )
        monkeypatch.setenv("CATALOG_PATH", str(catalog))

        main(["match", str(specs_file)])

        out = capsys.readouterr().out
        assert "catalog has 1 SKUs" in out
        assert "SKU-ONLY" in out

    def test_process_requires_api_key(self, clean_env, capsys):
        rfp = clean_env / "rfp.txt"
        rfp.write_text("x" * 200, encoding="utf-8")

        with pytest.raises(SystemExit) as exc:
            main(["process", str(rfp)])

        assert exc.value.code == 1
        assert "GOOGLE_API_KEY" in capsys.readouterr().err

    def test_catalog(self, clean_env, capsys):
        main(["catalog", "--category", "Transformers"])

        out = capsys.readouterr().out
        assert "SKU-XFMR-1000KVA-A" in out
        assert "SKU-XLPE-11KV-A" not in out
        assert "2 products" in out
