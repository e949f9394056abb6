"""
Unit tests for contact_book/cli/

Coverage plan
─────────────
arg parsing   → subcommands, defaults, env override of --db
add command   → success, required-field validation
list command  → empty, ordered output, search
edit command  → partial overlay, missing id, empty field
delete        → existing, missing id
main()        → exit codes end to end
"""

import pytest


# ─────────────────────────────────────────────────────────────────────────────
# Helpers
# ─────────────────────────────────────────────────────────────────────────────

def _parse(args: list[str]):
    """Call the CLI argument parser and return the parsed namespace."""
    from contact_book.cli.main import build_parser
    parser = build_parser()
    return parser.parse_args(args)


def _values(**overrides):
    values = {
        "first_name": "Jan",
        "last_name": "Adamski",
        "birth_date": "1990-01-01",
        "phone": "555-0100",
        "email": "jan@example.com",
        "address": "Main St 1",
    }
    values.update(overrides)
    return values


_ADD_ARGS = [
    "add",
    "--first-name", "Anna",
    "--last-name", "Nowak",
    "--birth-date", "2001-12-24",
    "--phone", "600",
    "--email", "anna@example.pl",
    "--address", "Gdańsk",
]


@pytest.fixture
def cache(tmp_path):
    """Fresh, loaded PersonCache for CLI command tests."""
    from contact_book.store.cache import PersonCache
    from contact_book.store.db import PersonStore
    c = PersonCache(PersonStore(db_path=str(tmp_path / "cli_test.db")))
    c.load()
    return c


# ─────────────────────────────────────────────────────────────────────────────
# 1. Argument parsing
# ─────────────────────────────────────────────────────────────────────────────

class TestArgParsing:

    def test_add_subcommand_parses_all_fields(self):
        ns = _parse(_ADD_ARGS)
        assert ns.subcommand == "add"
        assert ns.last_name == "Nowak"
        assert ns.address == "Gdańsk"

    def test_add_requires_every_field(self):
        with pytest.raises(SystemExit):
            _parse(["add", "--first-name", "Jan"])

    def test_list_search_defaults_to_none(self):
        ns = _parse(["list"])
        assert ns.subcommand == "list"
        assert ns.search is None

    def test_edit_fields_default_to_none(self):
        ns = _parse(["edit", "--id", "3", "--phone", "1"])
        assert ns.id == 3
        assert ns.phone == "1"
        assert ns.email is None

    def test_db_default_read_from_environment(self, monkeypatch, tmp_path):
        monkeypatch.setenv("CONTACT_BOOK_DB", str(tmp_path / "env.db"))
        ns = _parse(["list"])
        assert ns.db == str(tmp_path / "env.db")

    def test_db_default_without_environment(self, monkeypatch):
        from contact_book.cli.main import DEFAULT_DB_PATH
        monkeypatch.delenv("CONTACT_BOOK_DB", raising=False)
        assert _parse(["list"]).db == DEFAULT_DB_PATH


# ─────────────────────────────────────────────────────────────────────────────
# 2. add command
# ─────────────────────────────────────────────────────────────────────────────

class TestAddCommand:

    def test_add_persists_and_prints_id(self, cache, capsys):
        from contact_book.cli.main import cmd_add
        rec = cmd_add(cache=cache, values=_values())
        assert rec in list(cache)
        assert cache.store.get(rec.id) == rec
        assert f"id={rec.id}" in capsys.readouterr().out

    def test_add_strips_whitespace(self, cache):
        from contact_book.cli.main import cmd_add
        rec = cmd_add(cache=cache, values=_values(last_name="  Nowak  "))
        assert rec.last_name == "Nowak"

    def test_add_rejects_blank_field(self, cache):
        from contact_book.cli.main import cmd_add
        from contact_book.exceptions import ValidationError
        with pytest.raises(ValidationError, match="phone"):
            cmd_add(cache=cache, values=_values(phone="   "))
        assert len(cache) == 0


# ─────────────────────────────────────────────────────────────────────────────
# 3. list command
# ─────────────────────────────────────────────────────────────────────────────

class TestListCommand:

    def test_list_empty_store_outputs_zero_records(self, cache, capsys):
        from contact_book.cli.main import cmd_list
        cmd_list(cache=cache, search=None)
        assert "0 persons" in capsys.readouterr().out

    def test_list_prints_in_cache_order(self, cache, capsys):
        from contact_book.cli.main import cmd_list
        cache.add(*_values(last_name="Nowak").values())
        cache.add(*_values(last_name="Adamski").values())
        cache.load()
        cmd_list(cache=cache, search=None)
        out = capsys.readouterr().out
        assert out.index("Adamski") < out.index("Nowak")

    def test_list_search_filters_by_last_name(self, cache, capsys):
        from contact_book.cli.main import cmd_list
        cache.add(*_values(last_name="Nowak").values())
        cache.add(*_values(last_name="Adamski").values())
        cmd_list(cache=cache, search="NOW")
        out = capsys.readouterr().out
        assert "Nowak" in out
        assert "Adamski" not in out


# ─────────────────────────────────────────────────────────────────────────────
# 4. edit / delete commands
# ─────────────────────────────────────────────────────────────────────────────

class TestEditCommand:

    def test_edit_overlays_given_fields(self, cache):
        from contact_book.cli.main import cmd_edit
        rec = cache.add(*_values().values())
        updated = cmd_edit(cache=cache, record_id=rec.id,
                           changes={"phone": "555-9999", "email": None})
        assert updated.phone == "555-9999"
        assert updated.email == rec.email
        assert cache[0] == updated
        assert cache.store.get(rec.id) == updated

    def test_edit_missing_id_raises(self, cache):
        from contact_book.cli.main import cmd_edit
        with pytest.raises(ValueError):
            cmd_edit(cache=cache, record_id=999, changes={})

    def test_edit_to_blank_field_is_rejected(self, cache):
        from contact_book.cli.main import cmd_edit
        from contact_book.exceptions import ValidationError
        rec = cache.add(*_values().values())
        with pytest.raises(ValidationError):
            cmd_edit(cache=cache, record_id=rec.id, changes={"address": ""})
        assert cache.store.get(rec.id) == rec


class TestDeleteCommand:

    def test_delete_existing(self, cache):
        from contact_book.cli.main import cmd_delete
        rec = cache.add(*_values().values())
        assert cmd_delete(cache=cache, record_id=rec.id) is True
        assert len(cache) == 0
        assert cache.store.get(rec.id) is None

    def test_delete_missing_is_not_an_error(self, cache, capsys):
        from contact_book.cli.main import cmd_delete
        assert cmd_delete(cache=cache, record_id=77) is False
        assert "nothing deleted" in capsys.readouterr().out


# ─────────────────────────────────────────────────────────────────────────────
# 5. main()
# ─────────────────────────────────────────────────────────────────────────────

class TestMain:

    def test_no_subcommand_prints_help(self, capsys):
        from contact_book.cli.main import main
        assert main([]) == 0
        assert "usage" in capsys.readouterr().out.lower()

    def test_add_then_list_round_trip(self, tmp_path, capsys):
        from contact_book.cli.main import main
        db = str(tmp_path / "main.db")
        assert main(["--db", db, *_ADD_ARGS]) == 0
        assert main(["--db", db, "list"]) == 0
        assert "Nowak" in capsys.readouterr().out

    def test_add_with_blank_field_returns_1(self, tmp_path, capsys):
        from contact_book.cli.main import main
        args = list(_ADD_ARGS)
        args[args.index("--phone") + 1] = " "
        assert main(["--db", str(tmp_path / "m.db"), *args]) == 1
        assert "required" in capsys.readouterr().err

    def test_edit_missing_id_returns_1(self, tmp_path):
        from contact_book.cli.main import main
        assert main(["--db", str(tmp_path / "m.db"), "edit", "--id", "5", "--phone", "1"]) == 1

    def test_delete_missing_id_returns_0(self, tmp_path):
        from contact_book.cli.main import main
        assert main(["--db", str(tmp_path / "m.db"), "delete", "--id", "5"]) == 0

    def test_storage_error_returns_1(self, tmp_path, capsys):
        from contact_book.cli.main import main
        blocker = tmp_path / "file"
        blocker.write_text("x")
        assert main(["--db", str(blocker / "p.db"), "list"]) == 1
        assert "Error" in capsys.readouterr().err

    def test_package_exports_every_command(self):
        import importlib
        import contact_book.cli as cli_pkg
        cli_main = importlib.import_module("contact_book.cli.main")
        assert set(cli_main.__all__) <= set(cli_pkg.__all__)
        assert cli_pkg.cmd_privacy is cli_main.cmd_privacy

    def test_privacy_prints_notice(self, capsys):
        from contact_book.cli.main import main
        assert main(["privacy"]) == 0
        assert "locally" in capsys.readouterr().out
