import io
import textwrap

from captain.application.manifest import parse_list, parse_manifest, split_stanzas

MIRROR = "http://mirror.example.org/ubuntu"


def _parse(stanza: str):
    return parse_manifest(MIRROR, "jaunty", "main", textwrap.dedent(stanza))


def test_parses_names_dependencies_and_tasks():
    package = _parse(
        """\
        Package: foo
        Depends: bar (>= 1.0), baz | qux
        Task: minimal
        """
    )

    assert package.name == "foo"
    assert package.dependencies == {"bar", "baz", "qux"}
    assert package.tasks == {"minimal"}
    assert package.recommends == frozenset()


def test_keeps_archive_coordinates():
    package = _parse("Package: foo\n")

    assert (package.mirror, package.codename, package.component) == (MIRROR, "jaunty", "main")


def test_scalar_headers_keep_last_occurrence():
    package = _parse(
        """\
        Package: first
        Filename: pool/a.deb
        MD5sum: 11111111111111111111111111111111
        Package: second
        Filename: pool/b.deb
        MD5sum: 22222222222222222222222222222222
        """
    )

    assert package.name == "second"
    assert package.filename == "pool/b.deb"
    assert package.md5sum == "2" * 32


def test_list_headers_accumulate_across_repeats():
    package = _parse(
        """\
        Package: foo
        Recommends: a
        Recommends: b, c
        Task: minimal, standard
        Task: server
        """
    )

    assert package.recommends == {"a", "b", "c"}
    assert package.tasks == {"minimal", "standard", "server"}


def test_unmodelled_headers_are_ignored_but_retained():
    stanza = "Package: foo\nVersion: 1.0\nProvides: bar\nDescription: a thing\n"

    package = _parse(stanza)

    assert package.name == "foo"
    assert package.manifest == stanza
    assert not hasattr(package, "provides")


def test_missing_headers_leave_fields_empty():
    package = _parse("Version: 1.0\n")

    assert package.name is None
    assert package.filename is None
    assert package.md5sum is None


def test_parse_list_flattens_alternatives_and_drops_versions():
    assert parse_list(" libc6 (>= 2.4), libfoo1 | libbar1 (<< 3), ") == [
        "libc6",
        "libfoo1",
        "libbar1",
    ]


def test_copy_manifest_writes_stanza_and_one_blank_line():
    package = _parse("\n\nPackage: foo\nVersion: 1.0\n\n\n")
    sink = io.StringIO()

    package.copy_manifest_to(sink)

    assert sink.getvalue() == "Package: foo\nVersion: 1.0\n\n"


def test_split_stanzas_on_blank_lines():
    lines = ["Package: a", "Version: 1", "", "", "Package: b", "Version: 2"]

    assert list(split_stanzas(lines)) == [
        "Package: a\nVersion: 1\n",
        "Package: b\nVersion: 2\n",
    ]
