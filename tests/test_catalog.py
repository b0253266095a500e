import pytest

from shimectl.catalog import (
    DELETE_PROMPT_LIMIT,
    breed_template_name,
    delete_prompt,
    import_summary,
    mascot_name_from_folder,
)

QUESTION = "Are you sure you want to delete these shimeji?"


def test_breed_name_empty_uses_fallback():
    assert breed_template_name("", "Parent") == "Parent"


def test_breed_name_kept_when_plain():
    assert breed_template_name("Child", "Parent") == "Child"


@pytest.mark.parametrize(
    "raw",
    ["dir/sub/Child", "dir\\sub\\Child", "dir\\sub/Child", "dir/sub\\Child"],
)
def test_breed_name_last_component(raw):
    assert breed_template_name(raw, "Parent") == "Child"


def test_breed_name_fallback_path_is_stripped():
    assert breed_template_name("", "a/b\\Parent") == "Parent"


def test_breed_name_has_no_separators():
    result = breed_template_name("x/y\\z/w", "p")
    assert "/" not in result and "\\" not in result
    assert result == "w"


@pytest.mark.parametrize("name", ["Foo", "with space", "a.b", "x"])
def test_folder_name_round_trip(name):
    assert mascot_name_from_folder(name + ".mascot") == name


@pytest.mark.parametrize("folder", [".mascot", "Foo", "Foo.mascots", "Foo.txt", ""])
def test_folder_name_rejected(folder):
    assert mascot_name_from_folder(folder) is None


def test_delete_prompt_lists_names():
    names = ["A", "B", "C"]
    lines = delete_prompt(names).split("\n")
    assert lines[0] == QUESTION
    assert lines[1:] == ["* A", "* B", "* C"]


def test_delete_prompt_exactly_limit_has_no_tail():
    names = [str(i) for i in range(DELETE_PROMPT_LIMIT)]
    lines = delete_prompt(names).split("\n")
    assert len(lines) == DELETE_PROMPT_LIMIT + 1
    assert not lines[-1].startswith("...")


def test_delete_prompt_counts_hidden_names():
    names = [f"m{i}" for i in range(8)]
    lines = delete_prompt(names).split("\n")
    assert lines[1:6] == [f"* m{i}" for i in range(5)]
    assert lines[-1] == "... and 3 other(s)"
    assert "* m5" not in lines


def test_delete_prompt_empty_raises():
    with pytest.raises(ValueError):
        delete_prompt([])


def test_import_summary_none():
    summary = import_summary(0)
    assert summary.success is False
    assert summary.message == "Could not import any mascots from the specified archive(s)."


def test_import_summary_singular():
    summary = import_summary(1)
    assert summary.success is True
    assert summary.message == "Imported 1 mascot."


def test_import_summary_plural():
    summary = import_summary(4)
    assert summary.success is True
    assert summary.message == "Imported 4 mascots."


def test_import_summary_negative_raises():
    with pytest.raises(ValueError):
        import_summary(-1)