import pytest

from cubraycast.elements import (
    Elements,
    SceneError,
    check_texture_files,
    normalize_color,
    parse_color_line,
    parse_elements,
    parse_texture_line,
    validate_colors,
)

HEADER = [
    "NO ./north.xpm",
    "SO ./south.xpm",
    "WE ./west.xpm",
    "EA ./east.xpm",
    "F 220,100,0",
    "C 225,30,0",
]


def test_texture_line_keeps_path_from_the_dot():
    ident, path = parse_texture_line("  NO \t ./textures/north.xpm \t ")
    assert ident == "NO"
    assert path == "./textures/north.xpm"


@pytest.mark.parametrize(
    "line",
    ["NO textures/north.xpm", "NO .", "SO x ./a.xpm", "NOx ./a.xpm", "NO", "XX ./a.xpm"],
)
def test_texture_line_rejects(line):
    with pytest.raises(SceneError):
        parse_texture_line(line)


def test_normalize_color_drops_blanks():
    assert normalize_color("255, 0,\t12") == "255,0,12"


def test_normalize_color_allows_blank_before_comma():
    assert normalize_color("1 ,2 ,3") == normalize_color("1,2,3")


@pytest.mark.parametrize("text", ["1 2,3,4", "1,2", "1,2,3,4", "1,,2,3", "1,2,3,", "1\t 2,3,4"])
def test_normalize_color_rejects(text):
    with pytest.raises(SceneError):
        normalize_color(text)


def test_color_line_parts():
    ident, parts = parse_color_line("  C  10,20,30  ")
    assert ident == "C"
    assert ",".join(parts) == "10,20,30"


def test_color_line_ignores_trailing_comma_pair():
    _, parts = parse_color_line("F 1,2,3,,")
    assert parts == parse_color_line("F 1,2,3")[1]


@pytest.mark.parametrize("line", ["F5,5,5", "F 5", "F ,1,2,3", "F x,1,2", "X 1,2,3", ""])
def test_color_line_rejects(line):
    with pytest.raises(SceneError):
        parse_color_line(line)


def test_validate_colors_converts():
    ceiling, floor = validate_colors(["0", "128", "255"], ["255", "255", "255"])
    assert ceiling == (0, 128, 255)
    assert floor == (255, 255, 255)


def test_validate_colors_uses_first_three_parts():
    ceiling, _ = validate_colors(["1", "2", "3", "4"], ["1", "2", "3"])
    assert ceiling == validate_colors(["1", "2", "3"], ["1", "2", "3"])[0]


@pytest.mark.parametrize(
    "ceiling, floor",
    [
        (["256", "0", "0"], ["0", "0", "0"]),
        (["0", "0", "0"], ["1000", "0", "0"]),
        (["-1", "0", "0"], ["0", "0", "0"]),
        (["a", "0", "0"], ["0", "0", "0"]),
        (None, ["0", "0", "0"]),
        (["0", "0", "0"], None),
        (["1", "2"], ["0", "0", "0"]),
    ],
)
def test_validate_colors_rejects(ceiling, floor):
    with pytest.raises(SceneError):
        validate_colors(ceiling, floor)


def test_add_line_ignores_other_lines():
    elements = Elements()
    assert not elements.add_line("  1111")
    assert not elements.add_line("NORTH ./a.xpm")
    assert not elements.add_line("F1,2,3")
    assert elements == Elements()


def test_add_line_records_elements():
    elements = Elements()
    assert elements.add_line("SO ./south.xpm")
    assert elements.add_line("F 1,2,3")
    assert elements.textures == {"SO": "./south.xpm"}
    assert ",".join(elements.floor) == "1,2,3"
    assert elements.ceiling is None


@pytest.mark.parametrize("line", ["F 1,2,3", "NO ./a.xpm", "C 4,5,6"])
def test_add_line_rejects_duplicates(line):
    elements = Elements()
    elements.add_line(line)
    with pytest.raises(SceneError):
        elements.add_line(line)


def test_add_line_rejects_malformed_element():
    with pytest.raises(SceneError):
        Elements().add_line("EA textures")


def test_parse_elements_full_header():
    elements = parse_elements(HEADER + ["1111", "1N01", "1111"])
    assert elements.count == len(HEADER)
    assert elements.textures["WE"] == "./west.xpm"


@pytest.mark.parametrize("lines", [HEADER[:-1], HEADER[1:], HEADER + ["NO ./other.xpm"]])
def test_parse_elements_needs_each_once(lines):
    with pytest.raises(SceneError):
        parse_elements(lines)


def test_check_texture_files_accepts_existing(tmp_path):
    paths = []
    for name in ("a.xpm", "b.xpm"):
        target = tmp_path / name
        target.write_text("x")
        paths.append(str(target))
    assert check_texture_files(paths) == tuple(paths)


def test_check_texture_files_needs_extension(tmp_path):
    target = tmp_path / "a.png"
    target.write_text("x")
    with pytest.raises(SceneError):
        check_texture_files([str(target)])


def test_check_texture_files_needs_file(tmp_path):
    with pytest.raises(SceneError):
        check_texture_files([str(tmp_path / "none.xpm")])