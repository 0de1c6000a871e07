from bindeps.domain.binary import LATEST, Binary, Config, default_name, normalize_binary, split_package


def test_version_defaults_to_latest():
    result = normalize_binary("golang.org/x/tools/cmd/stringer")
    assert result.value is not None
    assert result.value.version == LATEST
    assert result.value.is_latest


def test_name_defaults_to_last_path_segment():
    result = normalize_binary("github.com/golangci/golangci-lint/cmd/golangci-lint", version="v1.55.2")
    assert result.value.name == "golangci-lint"
    assert default_name("example.org/tool/") == "tool"


def test_embedded_version_is_split_off():
    result = normalize_binary("example.org/tool@v1.2.3")
    assert result.value == Binary(package="example.org/tool", version="v1.2.3", name="tool")
    assert split_package("example.org/tool") == ("example.org/tool", "")


def test_embedded_and_explicit_version_conflict_fails():
    result = normalize_binary("example.org/tool@v1.2.3", version="v2.0.0")
    assert result.value is None
    assert [d.code for d in result.diagnostics] == ["BINARY_VERSION_CONFLICT"]


def test_matching_embedded_and_explicit_version_is_accepted():
    result = normalize_binary("example.org/tool@v1.2.3", version="v1.2.3")
    assert result.value.version == "v1.2.3"
    assert result.value.package == "example.org/tool"


def test_empty_embedded_version_falls_back_to_latest():
    result = normalize_binary("example.org/tool@")
    assert result.value.version == LATEST


def test_invalid_packages_are_rejected():
    assert normalize_binary("@v1").diagnostics[0].code == "MANIFEST_INVALID"
    assert normalize_binary("example.org/tool@v1@v2").diagnostics[0].code == "MANIFEST_INVALID"
    assert normalize_binary("/").diagnostics[0].code == "MANIFEST_INVALID"


def test_explicit_name_and_toolchain_are_kept():
    result = normalize_binary("example.org/tool", version="v1", name="t", toolchain="go1.22.0")
    assert result.value.name == "t"
    assert result.value.display_version == "v1 (go1.22.0)"


def test_config_find_returns_first_match():
    first = Binary(package="example.org/a/tool", version="v1", name="tool")
    second = Binary(package="example.org/b/tool", version="v2", name="tool")
    config = Config(binaries=(first, second))
    assert config.find("tool") is first
    assert config.find("missing") is None
    assert config.bin_dir == "bin"
