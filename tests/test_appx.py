from __future__ import annotations

from workstation_setup.lib import appx


def test_absent_app_counts_as_removed(fake_cmd):
    assert appx.remove_app("Microsoft.BingWeather") is True
    assert fake_cmd.mutating_calls == []


def test_removes_every_matching_package(fake_cmd):
    fake_cmd.appx["Microsoft.ZuneMusic"] = [
        "Microsoft.ZuneMusic_11.2403.5.0_x64__8wekyb3d8bbwe",
        "Microsoft.ZuneMusic_11.2403.5.0_neutral_~_8wekyb3d8bbwe",
    ]

    assert appx.remove_app("Microsoft.ZuneMusic") is True
    removed = [argv[-1] for argv in fake_cmd.mutating_calls]
    assert len(removed) == 2
    assert "Microsoft.ZuneMusic_11.2403.5.0_x64__8wekyb3d8bbwe" in removed[0]


def test_failed_removal_is_reported(fake_cmd):
    full = "Microsoft.People_10.2202.100.0_x64__8wekyb3d8bbwe"
    fake_cmd.appx["Microsoft.People"] = [full]
    fake_cmd.remove_failures.add(full)

    assert appx.remove_app("Microsoft.People") is False


def test_names_are_quoted_for_powershell(fake_cmd):
    appx.find_packages("O'Brien.App")
    script = fake_cmd.calls[0][-1]
    assert "'O''Brien.App'" in script


def test_failed_lookup_is_not_treated_as_absent(fake_cmd):
    fake_cmd.appx_query_failures.add("Microsoft.BingNews")

    assert appx.find_packages("Microsoft.BingNews") is None
    assert appx.remove_app("Microsoft.BingNews") is False
    assert fake_cmd.mutating_calls == []


def test_remove_step_counts_failed_lookup(fake_cmd):
    from workstation_setup.profile import SetupProfile
    from workstation_setup.run_state import new_state
    from workstation_setup.steps import RemoveAppsStep

    fake_cmd.appx_query_failures.add("Microsoft.BingNews")
    state = new_state({})
    state["profile"] = SetupProfile(raw={"remove_apps": ["Microsoft.BingNews", "Microsoft.BingWeather"]})

    state = RemoveAppsStep().run(state)

    assert state["execution"]["summary"]["30_remove_apps"] == {
        "total": 2,
        "succeeded": 1,
        "failed": ["Microsoft.BingNews"],
    }
