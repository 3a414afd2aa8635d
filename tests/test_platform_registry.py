import pytest

from modulekit.platforms import DEFAULT_PLATFORMS, PlatformRegistry, TargetPlatform, canonical_platform
from module_gate.framework.request import parse_build_request, platform_registry, resolve_platform


def test_default_registry_parses_case_insensitively():
    assert DEFAULT_PLATFORMS.try_parse("win64") == TargetPlatform("Win64")
    assert DEFAULT_PLATFORMS.try_parse(" Linux ") == TargetPlatform("Linux")
    assert DEFAULT_PLATFORMS.try_parse("Amiga") is None
    assert DEFAULT_PLATFORMS.try_parse(None) is None  # type: ignore[arg-type]
    assert DEFAULT_PLATFORMS.get("mac").name == "Mac"


def test_registry_rejects_duplicates_and_unknown_lookups():
    with pytest.raises(ValueError, match=r"Duplicate platform name: win64"):
        PlatformRegistry.from_names(["Win64", "win64"])

    registry = PlatformRegistry.from_names(["Win64"])
    with pytest.raises(ValueError, match=r"Unknown platform: Mac \(available: Win64\)"):
        registry.get("Mac")


def test_registry_extend_keeps_existing_platforms():
    registry = DEFAULT_PLATFORMS.extend(["Quest"])

    assert registry.available()[-1] == "Quest"
    assert registry.try_parse("Win64") is not None
    assert DEFAULT_PLATFORMS.try_parse("Quest") is None


def test_resolve_platform_suggests_close_names():
    with pytest.raises(ValueError, match=r"Unknown platform: 'Win46' \(did you mean: Win64"):
        resolve_platform("Win46")


def test_parse_build_request_canonicalizes_user_input():
    request = parse_build_request(
        platform="win64",
        configuration="development",
        target_type="program",
        target_name=" ShaderCompileWorker ",
        developer_tools=True,
    )

    assert request.platform == TargetPlatform("Win64")
    assert request.configuration == "Development"
    assert request.target_type == "Program"
    assert request.target_name == "ShaderCompileWorker"
    assert request.developer_tools_enabled is True
    assert request.cooked_data_required is False


def test_parse_build_request_rejects_unknown_enums():
    with pytest.raises(ValueError, match=r"--configuration must be one of"):
        parse_build_request(platform="Win64", configuration="Nightly", target_type="Game")
    with pytest.raises(ValueError, match=r"--target-type must be one of"):
        parse_build_request(platform="Win64", configuration="Debug", target_type="Toaster")


def test_target_platform_identity_ignores_case():
    assert TargetPlatform("win64") == TargetPlatform("Win64")
    assert hash(TargetPlatform("win64")) == hash(TargetPlatform("WIN64"))
    assert len({TargetPlatform("Mac"), TargetPlatform("mac")}) == 1
    assert TargetPlatform("win64").name == "win64"


def test_canonical_platform_uses_registry_spelling():
    assert canonical_platform("win64").name == "Win64"
    assert canonical_platform(TargetPlatform("LINUX")).name == "Linux"
    assert canonical_platform("Quest").name == "Quest"
    assert canonical_platform("quest", platforms=DEFAULT_PLATFORMS.extend(["Quest"])).name == "Quest"


def test_platform_registry_helper_extends_defaults():
    assert platform_registry(None) is DEFAULT_PLATFORMS
    assert platform_registry(["", " "]) is DEFAULT_PLATFORMS

    registry = platform_registry(["Quest"])
    assert resolve_platform("quest", platforms=registry).name == "Quest"
    with pytest.raises(ValueError, match=r"Unknown platform"):
        resolve_platform("Quest")
