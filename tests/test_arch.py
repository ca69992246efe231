from pytest_archon import archrule


def test_strategies_do_not_import_manager() -> None:
    (
        archrule("strategies-are-standalone")
        .match("credstrategy.strategies*")
        .should_not_import("credstrategy.manager", "credstrategy.registry")
        .check("credstrategy")
    )


def test_utils_do_not_import_public_modules() -> None:
    (
        archrule("utils-are-leaves")
        .match("credstrategy._utils*")
        .should_not_import(
            "credstrategy.manager", "credstrategy.registry", "credstrategy.strategies*"
        )
        .check("credstrategy")
    )
