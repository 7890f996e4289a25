import pytest

from doctor_core import requirements as req
from doctor_core.requirements import (
    VersionConstraint,
    parse_string_requirement,
    parse_version_requirement,
    satisfies_requirement,
)


def _c(op: str, version: str) -> VersionConstraint:
    return VersionConstraint(operator=op, version=version)


def test_parse_string_single_constraint() -> None:
    assert parse_string_requirement(">= 18.0.0") == [_c(">=", "18.0.0")]


def test_parse_string_multiple_constraints_keep_order() -> None:
    assert parse_string_requirement(">= 18.0.0, < 22.0.0") == [_c(">=", "18.0.0"), _c("<", "22.0.0")]


def test_parse_string_extra_whitespace() -> None:
    assert parse_string_requirement("  >=   18.0.0  ,  <   20.0.0  ") == [_c(">=", "18.0.0"), _c("<", "20.0.0")]


def test_parse_string_all_operators() -> None:
    result = parse_string_requirement("= 1.0.0, >= 2.0.0, <= 3.0.0, > 4.0.0, < 5.0.0, ^ 6.0.0, ~ 7.0.0")
    assert [(c.operator, c.version) for c in result] == [
        ("=", "1.0.0"),
        (">=", "2.0.0"),
        ("<=", "3.0.0"),
        (">", "4.0.0"),
        ("<", "5.0.0"),
        ("^", "6.0.0"),
        ("~", "7.0.0"),
    ]


def test_parse_string_operator_without_space() -> None:
    assert parse_string_requirement(">=18,<=20.1.0") == [_c(">=", "18"), _c("<=", "20.1.0")]


def test_parse_string_drops_invalid_fragments() -> None:
    assert parse_string_requirement(">= 18.0.0, invalid, < 20.0.0") == [_c(">=", "18.0.0"), _c("<", "20.0.0")]


def test_parse_string_empty_and_all_invalid() -> None:
    assert parse_string_requirement("") == []
    assert parse_string_requirement("invalid, also invalid") == []


def test_parse_version_requirement_shapes() -> None:
    assert parse_version_requirement(">= 18.0.0, < 20.0.0") == [_c(">=", "18.0.0"), _c("<", "20.0.0")]
    assert parse_version_requirement(_c(">=", "18.0.0")) == [_c(">=", "18.0.0")]
    assert parse_version_requirement({"operator": "^", "version": "18.0.0"}) == [_c("^", "18.0.0")]


def test_parse_version_requirement_list_is_identity() -> None:
    constraints = [_c(">=", "18.0.0"), _c("<", "20.0.0")]
    once = parse_version_requirement(constraints)
    assert once is constraints
    assert parse_version_requirement(once) == once


def test_parse_version_requirement_converts_mapping_items() -> None:
    mixed = [{"operator": ">=", "version": "3.10.0"}, _c("<", "4.0.0")]
    assert parse_version_requirement(mixed) == [_c(">=", "3.10.0"), _c("<", "4.0.0")]
    assert parse_version_requirement((_c("^", "1.0.0"),)) == [_c("^", "1.0.0")]


def test_parse_version_requirement_rejects_unknown_type() -> None:
    with pytest.raises(TypeError):
        parse_version_requirement(18)  # type: ignore[arg-type]


def test_constraint_rejects_unknown_operator() -> None:
    with pytest.raises(ValueError, match="Unsupported operator"):
        VersionConstraint(operator="!=", version="1.0.0")


def test_satisfies_all_constraints() -> None:
    result = satisfies_requirement("19.5.0", [_c(">=", "18.0.0"), _c("<", "20.0.0")])
    assert result.satisfies is True
    assert result.satisfied_constraints == [">=18.0.0", "<20.0.0"]
    assert result.failed_constraints == []


def test_satisfies_partial_failure() -> None:
    result = satisfies_requirement("20.5.0", [_c(">=", "18.0.0"), _c("<", "20.0.0")])
    assert result.satisfies is False
    assert result.satisfied_constraints == [">=18.0.0"]
    assert result.failed_constraints == ["<20.0.0"]


def test_satisfies_all_fail() -> None:
    result = satisfies_requirement("18.5.0", [_c(">=", "20.0.0"), _c(">=", "22.0.0")])
    assert result.satisfies is False
    assert result.satisfied_constraints == []
    assert result.failed_constraints == [">=20.0.0", ">=22.0.0"]


def test_invalid_current_version_short_circuits() -> None:
    result = satisfies_requirement("invalid", [_c(">=", "18.0.0"), _c("<", "20.0.0")])
    assert result.satisfies is False
    assert result.satisfied_constraints == []
    assert result.failed_constraints == ["Invalid current version format"]


def test_invalid_constraint_version_reported_per_constraint() -> None:
    result = satisfies_requirement("19.0.0", [_c(">=", "18.0.0"), _c(">=", "invalid")])
    assert result.satisfies is False
    assert result.satisfied_constraints == [">=18.0.0"]
    assert result.failed_constraints == ["Invalid version format: >=invalid"]


def test_partial_constraint_version_is_invalid() -> None:
    result = satisfies_requirement("21.0.0", parse_string_requirement(">= 20.0.0, < 22"))
    assert result.satisfied_constraints == [">=20.0.0"]
    assert result.failed_constraints == ["Invalid version format: <22"]


def test_empty_constraints_vacuously_satisfied() -> None:
    result = satisfies_requirement("18.0.0", [])
    assert result.satisfies is True
    assert result.satisfied_constraints == []
    assert result.failed_constraints == []


def test_descriptions_use_cleaned_versions() -> None:
    result = satisfies_requirement("v20.1.0", [_c(">=", "v18.0.0"), _c("=", "20.1.0+build.7")])
    assert result.satisfies is True
    assert result.satisfied_constraints == [">=18.0.0", "=20.1.0"]


def test_exact_caret_and_tilde() -> None:
    assert satisfies_requirement("18.0.0", [_c("=", "18.0.0")]).satisfied_constraints == ["=18.0.0"]
    assert satisfies_requirement("18.5.2", [_c("^", "18.0.0")]).satisfies is True
    assert satisfies_requirement("19.0.0", [_c("^", "18.0.0")]).satisfies is False
    assert satisfies_requirement("18.1.5", [_c("~", "18.1.0")]).satisfies is True
    assert satisfies_requirement("18.2.0", [_c("~", "18.1.0")]).satisfies is False


def test_prerelease_ordering() -> None:
    result = satisfies_requirement("18.0.0-beta.1", [_c(">=", "18.0.0-alpha.1")])
    assert result.satisfies is True
    assert result.satisfied_constraints == [">=18.0.0-alpha.1"]
    assert satisfies_requirement("18.0.0-beta.1", [_c(">=", "18.0.0")]).satisfies is False


def test_prerelease_of_later_release_orders_by_precedence() -> None:
    # no npm-style exclusion of prereleases from other release triples
    result = satisfies_requirement("20.0.0-rc.1", [_c(">=", "18.0.0")])
    assert result.satisfies is True
    assert result.satisfied_constraints == [">=18.0.0"]
    assert result.failed_constraints == []


def test_every_constraint_lands_in_exactly_one_list() -> None:
    constraints = parse_string_requirement(">= 1.0.0, < 2.0.0, ^1.4.0, ~1.5.0, = 1.5.3, > nope")
    result = satisfies_requirement("1.5.3", constraints)
    assert len(result.satisfied_constraints) + len(result.failed_constraints) == len(constraints)
    assert result.satisfies == (not result.failed_constraints)


def test_unexpected_fault_becomes_generic_failure(monkeypatch) -> None:
    def _boom(*_args, **_kwargs):
        raise RuntimeError("boom")

    monkeypatch.setattr(req.semver, "satisfies", _boom)
    result = satisfies_requirement("1.0.0", [_c(">=", "1.0.0")])
    assert result.satisfies is False
    assert result.satisfied_constraints == []
    assert result.failed_constraints == ["Error processing version requirement"]
