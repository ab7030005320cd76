import pytest

from simpledot_installer.errors import IntegrationError
from simpledot_installer.lib.integrations import IntegrationKind
from simpledot_installer.prompt import ConfirmationPrompt
from simpledot_installer.steps.step_50_integrations import (
    Integration,
    IntegrationOutcome,
    IntegrationsStep,
    build_integrations,
)

from fakes import FakeIntegrator


def test_declining_one_integration_leaves_others(make_workflow):
    """Scenario: only GRUB and Thunar accepted"""
    workflow, _, fakes = make_workflow(["n", "n", "y", "n", "n", "y"])

    result = IntegrationsStep().run(workflow.ctx)

    assert fakes["integrator"].calls == ["grub_theme", "org.xfce.Terminal.Settings"]
    assert result.outcome == "applied=2"
    assert workflow.ctx.outcomes["integration:shell"] == "declined"
    assert workflow.ctx.outcomes["integration:thunar_terminal"] == "applied"


def test_failing_integration_aborts_the_rest(make_workflow):
    """Scenario: accepted shell change fails, later integrations never asked"""
    workflow, prompter, fakes = make_workflow(["y", "y"], integrator=FakeIntegrator(fail_on="shell"))

    with pytest.raises(IntegrationError) as exc:
        IntegrationsStep().run(workflow.ctx)

    assert exc.value.returncode == 4
    assert fakes["integrator"].calls == ["font_cache"]
    assert len(prompter.asked) == 2


def test_integration_order(make_workflow):
    """Scenario: fixed integration order"""
    workflow, _, _ = make_workflow([])

    kinds = [i.kind for i in build_integrations(workflow.ctx)]

    assert kinds == [
        IntegrationKind.FONT_CACHE,
        IntegrationKind.SHELL,
        IntegrationKind.GRUB_THEME,
        IntegrationKind.SDDM_THEME,
        IntegrationKind.NEMO_TERMINAL,
        IntegrationKind.THUNAR_TERMINAL,
    ]


def test_apply_optional_integration_wraps_os_errors(make_workflow):
    """Scenario: an action hitting a filesystem error"""
    workflow, _, _ = make_workflow(["y"])

    def action():
        raise FileNotFoundError("/etc/default/grub")

    integration = Integration(IntegrationKind.GRUB_THEME, ConfirmationPrompt("Change GRUB?"), action)

    with pytest.raises(IntegrationError):
        workflow.apply_optional_integration(integration)


def test_declined_integration_never_runs_action(make_workflow):
    workflow, _, _ = make_workflow(["n"])
    called = []
    integration = Integration(IntegrationKind.FONT_CACHE, ConfirmationPrompt("Refresh?"), lambda: called.append(1))

    assert workflow.apply_optional_integration(integration) is IntegrationOutcome.DECLINED
    assert called == []
