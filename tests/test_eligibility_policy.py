import pytest

from modulekit.codec import decode
from modulekit.descriptor import ModuleDescriptor
from modulekit.platforms import DEFAULT_PLATFORMS, TargetPlatform
from modulekit.policy import BuildRequest, explain_eligibility, host_type_allows, is_eligible
from modulekit.targets import MODULE_HOST_TYPES, TARGET_CONFIGURATIONS, TARGET_TYPES

WIN64 = TargetPlatform("Win64")


def _eligible(
    module,
    *,
    platform=WIN64,
    configuration="Development",
    target_name="MyGame",
    target_type="Game",
    developer_tools=False,
    cooked=False,
):
    return is_eligible(module, platform, configuration, target_name, target_type, developer_tools, cooked)


def test_empty_platform_allow_list_excludes_every_platform():
    module = ModuleDescriptor("Core", "RuntimeAndProgram", platform_allow_list=[])

    for name in DEFAULT_PLATFORMS.available():
        assert _eligible(module, platform=TargetPlatform(name)) is False


def test_unrestricted_platform_allow_list_never_excludes():
    module = ModuleDescriptor("Core", "RuntimeAndProgram")

    for name in DEFAULT_PLATFORMS.available():
        assert _eligible(module, platform=TargetPlatform(name)) is True


def test_platform_allow_list_membership():
    module = ModuleDescriptor("Core", "Runtime", platform_allow_list=["Win64", "Linux"])

    assert _eligible(module, platform=TargetPlatform("Linux")) is True
    assert _eligible(module, platform=TargetPlatform("Mac")) is False
    assert _eligible(module, platform="Win64") is True


def test_deny_lists_override_allow_lists():
    module = ModuleDescriptor(
        "Core",
        "RuntimeAndProgram",
        platform_allow_list=["Win64"],
        platform_deny_list=["Win64"],
        target_allow_list=["Game"],
        target_deny_list=["Game"],
    )
    assert _eligible(module) is False

    configs = ModuleDescriptor(
        "Core",
        "RuntimeAndProgram",
        target_configuration_allow_list=["Shipping"],
        target_configuration_deny_list=["Shipping"],
    )
    assert _eligible(configs, configuration="Shipping") is False


def test_empty_target_and_configuration_allow_lists_are_unrestricted():
    module = ModuleDescriptor(
        "Core",
        "Runtime",
        target_allow_list=[],
        target_configuration_allow_list=[],
    )

    for target_type in ("Game", "Editor", "Client", "Server"):
        for configuration in TARGET_CONFIGURATIONS:
            assert _eligible(module, target_type=target_type, configuration=configuration) is True


def test_target_and_configuration_allow_lists_restrict():
    module = ModuleDescriptor(
        "Core",
        "RuntimeAndProgram",
        target_allow_list=["Editor"],
        target_configuration_allow_list=["Debug"],
    )

    assert _eligible(module, target_type="Editor", configuration="Debug") is True
    assert _eligible(module, target_type="Game", configuration="Debug") is False
    assert _eligible(module, target_type="Editor", configuration="Development") is False


def test_program_allow_list_short_circuits_host_type():
    module = ModuleDescriptor("Core", "Runtime", program_allow_list=["MyTool"])

    assert _eligible(module, target_type="Program", target_name="MyTool") is True
    assert _eligible(module, target_type="Program", target_name="OtherTool") is False

    decision = explain_eligibility(
        module, BuildRequest(WIN64, "Development", "MyTool", "Program")
    )
    assert decision.rule == "program_allow"


def test_program_allow_list_does_not_bypass_earlier_checks():
    module = ModuleDescriptor(
        "Core",
        "Runtime",
        program_allow_list=["MyTool"],
        platform_deny_list=["Win64"],
    )

    assert _eligible(module, target_type="Program", target_name="MyTool") is False


def test_program_lists_only_apply_to_program_targets():
    module = ModuleDescriptor(
        "Core",
        "Runtime",
        program_allow_list=["MyTool"],
        program_deny_list=["MyGame"],
    )

    assert _eligible(module, target_type="Game", target_name="MyGame") is True


def test_program_deny_list_excludes_program():
    module = ModuleDescriptor("Core", "RuntimeAndProgram", program_deny_list=["MyTool"])

    assert _eligible(module, target_type="Program", target_name="MyTool") is False
    assert _eligible(module, target_type="Program", target_name="OtherTool") is True


def test_runtime_versus_runtime_and_program_for_program_targets():
    for configuration in TARGET_CONFIGURATIONS:
        runtime = ModuleDescriptor("Core", "Runtime")
        both = ModuleDescriptor("Core", "RuntimeAndProgram")
        assert _eligible(runtime, target_type="Program", configuration=configuration) is False
        assert _eligible(both, target_type="Program", configuration=configuration) is True


# host type -> target types that accept it (with developer tools off, uncooked)
_HOST_TYPE_TARGETS = {
    "Default": set(),
    "Runtime": {"Game", "Editor", "Client", "Server"},
    "RuntimeNoCommandlet": {"Game", "Editor", "Client", "Server"},
    "RuntimeAndProgram": {"Game", "Editor", "Client", "Server", "Program"},
    "CookedOnly": set(),
    "UncookedOnly": {"Game", "Editor", "Client", "Server", "Program"},
    "Developer": {"Editor", "Program"},
    "DeveloperTool": set(),
    "Editor": {"Editor"},
    "EditorNoCommandlet": {"Editor"},
    "EditorAndProgram": {"Editor", "Program"},
    "Program": {"Program"},
    "ServerOnly": {"Game", "Editor", "Server"},
    "ClientOnly": {"Game", "Editor", "Client"},
    "ClientOnlyNoCommandlet": {"Game", "Editor", "Client"},
}


@pytest.mark.parametrize("host_type", MODULE_HOST_TYPES)
def test_host_type_dispatch(host_type):
    module = ModuleDescriptor("Core", host_type)
    expected = _HOST_TYPE_TARGETS[host_type]

    for target_type in TARGET_TYPES:
        assert _eligible(module, target_type=target_type, target_name="Tool") is (target_type in expected), (
            host_type,
            target_type,
        )


def test_cooked_and_developer_tool_flags():
    cooked = ModuleDescriptor("Core", "CookedOnly")
    uncooked = ModuleDescriptor("Core", "UncookedOnly")
    tool = ModuleDescriptor("Core", "DeveloperTool")

    assert _eligible(cooked, cooked=True) is True
    assert _eligible(cooked, cooked=False) is False
    assert _eligible(uncooked, cooked=True) is False
    assert _eligible(tool, developer_tools=True) is True
    assert _eligible(tool, developer_tools=False) is False


def test_unknown_host_type_fails_closed():
    request = BuildRequest(WIN64, "Development", "MyGame", "Game")
    assert host_type_allows("Sometimes", request) is False  # type: ignore[arg-type]


def test_explain_reports_first_failing_rule_and_agrees_with_is_eligible():
    module = ModuleDescriptor(
        "Core",
        "Editor",
        platform_deny_list=["Mac"],
        target_deny_list=["Server"],
        target_configuration_allow_list=["Debug"],
    )
    cases = [
        (BuildRequest(TargetPlatform("Mac"), "Shipping", "X", "Server"), "platform_deny", False),
        (BuildRequest(WIN64, "Shipping", "X", "Server"), "target_deny", False),
        (BuildRequest(WIN64, "Shipping", "X", "Editor"), "configuration_allow", False),
        (BuildRequest(WIN64, "Debug", "X", "Game"), "host_type", False),
        (BuildRequest(WIN64, "Debug", "X", "Editor"), "host_type", True),
    ]

    for request, rule, eligible in cases:
        decision = explain_eligibility(module, request)
        assert decision.rule == rule
        assert decision.eligible is eligible
        assert _eligible(
            module,
            platform=request.platform,
            configuration=request.configuration,
            target_name=request.target_name,
            target_type=request.target_type,
        ) is eligible


def test_evaluation_is_pure():
    module = ModuleDescriptor("Core", "Runtime", platform_allow_list=["Win64"], program_allow_list=["Tool"])
    snapshot = ModuleDescriptor(
        "Core", "Runtime", platform_allow_list=["Win64"], program_allow_list=["Tool"]
    )

    for target_type in TARGET_TYPES:
        _eligible(module, target_type=target_type, target_name="Tool")

    assert module == snapshot


def test_platform_names_match_regardless_of_case():
    allowed = decode({"Name": "Core", "Type": "Runtime", "WhitelistPlatforms": ["Win64"]})
    denied = decode({"Name": "Core", "Type": "Runtime", "BlacklistPlatforms": ["Win64"]})
    assigned = ModuleDescriptor("Core", "Runtime", platform_allow_list=["win64"])

    assert _eligible(allowed, platform="win64") is True
    assert _eligible(denied, platform="win64") is False
    assert _eligible(denied, platform=TargetPlatform("WIN64")) is False
    assert _eligible(assigned, platform=DEFAULT_PLATFORMS.get("Win64")) is True
    assert BuildRequest("win64", "Development", "G", "Game").platform.name == "Win64"


def test_empty_program_name_in_allow_list_excludes_other_programs():
    module = decode({"Name": "Tools", "Type": "Program", "WhitelistPrograms": [""]})

    assert _eligible(module, target_type="Program", target_name="ShaderCompileWorker") is False
    assert explain_eligibility(
        module, BuildRequest(WIN64, "Development", "ShaderCompileWorker", "Program")
    ).rule == "program_allow"
