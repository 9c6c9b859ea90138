"""Unit tests for the petition validator."""

from dataclasses import replace

import pytest

from petition_registry.domain.errors.registry import (
    PetitionRuleViolationError,
    RegistryErrorCode,
)
from petition_registry.domain.models.petition import PetitionDraft
from petition_registry.domain.models.registry_configuration import (
    RegistryConfiguration,
)
from petition_registry.domain.models.title_index import TitleIndex
from petition_registry.domain.services import petition_validator
from petition_registry.domain.services.petition_validator import CreationContext
from tests.helpers import make_petition

HEIGHT = 100


@pytest.fixture
def draft() -> PetitionDraft:
    return PetitionDraft(
        title="Fix the roads",
        description="Potholes everywhere",
        target_signatures=10,
        deadline=HEIGHT + 1,
        category="policy",
        priority=0,
        location="",
        tags=(),
        min_signatures=1,
        max_extension=0,
    )


@pytest.fixture
def context() -> CreationContext:
    return CreationContext(
        configuration=RegistryConfiguration(authority="SP2AUTHORITY"),
        current_height=HEIGHT,
        title_index=TitleIndex(),
    )


class TestCreationRules:
    def test_valid_draft_passes(self, draft: PetitionDraft, context: CreationContext) -> None:
        assert petition_validator.check_creation(draft, context) is None
        petition_validator.validate_creation(draft, context)

    @pytest.mark.parametrize(
        ("changes", "expected"),
        [
            ({"title": ""}, RegistryErrorCode.INVALID_TITLE),
            ({"title": "x" * 101}, RegistryErrorCode.INVALID_TITLE),
            ({"description": ""}, RegistryErrorCode.INVALID_DESCRIPTION),
            ({"description": "x" * 501}, RegistryErrorCode.INVALID_DESCRIPTION),
            ({"target_signatures": 0}, RegistryErrorCode.INVALID_TARGET),
            ({"deadline": HEIGHT}, RegistryErrorCode.INVALID_DEADLINE),
            ({"deadline": HEIGHT - 50}, RegistryErrorCode.INVALID_DEADLINE),
            ({"category": "sports"}, RegistryErrorCode.INVALID_CATEGORY),
            ({"priority": 11}, RegistryErrorCode.INVALID_PRIORITY),
            ({"priority": -1}, RegistryErrorCode.INVALID_PRIORITY),
            ({"location": "x" * 101}, RegistryErrorCode.INVALID_LOCATION),
            ({"tags": tuple(f"t{i}" for i in range(11))}, RegistryErrorCode.INVALID_TAGS),
            ({"min_signatures": 0}, RegistryErrorCode.INVALID_MIN_SIGNATURES),
            ({"max_extension": 31}, RegistryErrorCode.INVALID_MAX_EXTENSION),
            ({"max_extension": -1}, RegistryErrorCode.INVALID_MAX_EXTENSION),
        ],
    )
    def test_single_rule_failures(
        self,
        draft: PetitionDraft,
        context: CreationContext,
        changes: dict[str, object],
        expected: RegistryErrorCode,
    ) -> None:
        assert petition_validator.check_creation(replace(draft, **changes), context) == expected

    def test_boundaries_are_inclusive(
        self, draft: PetitionDraft, context: CreationContext
    ) -> None:
        edge = replace(
            draft,
            title="t" * 100,
            description="d" * 500,
            priority=10,
            location="l" * 100,
            tags=tuple(f"t{i}" for i in range(10)),
            max_extension=30,
        )
        assert petition_validator.check_creation(edge, context) is None

    def test_duplicate_title(self, draft: PetitionDraft, context: CreationContext) -> None:
        context.title_index.insert(draft.title, 0)

        assert (
            petition_validator.check_creation(draft, context)
            == RegistryErrorCode.PETITION_ALREADY_EXISTS
        )

    def test_missing_authority(self, draft: PetitionDraft) -> None:
        context = CreationContext(
            configuration=RegistryConfiguration(),
            current_height=HEIGHT,
            title_index=TitleIndex(),
        )
        assert (
            petition_validator.check_creation(draft, context)
            == RegistryErrorCode.AUTHORITY_NOT_SET
        )

    def test_capacity_reported_before_everything(self, draft: PetitionDraft) -> None:
        context = CreationContext(
            configuration=RegistryConfiguration(petition_counter=2, max_petitions=2),
            current_height=HEIGHT,
            title_index=TitleIndex(),
        )
        broken = replace(draft, title="", category="sports")

        assert (
            petition_validator.check_creation(broken, context)
            == RegistryErrorCode.MAX_PETITIONS_EXCEEDED
        )

    def test_first_failing_rule_wins(
        self, draft: PetitionDraft, context: CreationContext
    ) -> None:
        broken = replace(draft, description="", priority=99, tags=("x",) * 20)

        assert (
            petition_validator.check_creation(broken, context)
            == RegistryErrorCode.INVALID_DESCRIPTION
        )

    def test_field_errors_reported_before_duplicate_and_authority(
        self, draft: PetitionDraft
    ) -> None:
        index = TitleIndex({draft.title: 0})
        context = CreationContext(
            configuration=RegistryConfiguration(),
            current_height=HEIGHT,
            title_index=index,
        )

        assert (
            petition_validator.check_creation(replace(draft, min_signatures=0), context)
            == RegistryErrorCode.INVALID_MIN_SIGNATURES
        )
        assert (
            petition_validator.check_creation(draft, context)
            == RegistryErrorCode.PETITION_ALREADY_EXISTS
        )

    def test_validate_creation_raises_with_code(
        self, draft: PetitionDraft, context: CreationContext
    ) -> None:
        with pytest.raises(PetitionRuleViolationError) as exc_info:
            petition_validator.validate_creation(replace(draft, target_signatures=-3), context)

        assert exc_info.value.code == RegistryErrorCode.INVALID_TARGET

    def test_rule_order_is_fixed(self) -> None:
        assert [code for code, _ in petition_validator.CREATION_RULES] == [
            RegistryErrorCode.MAX_PETITIONS_EXCEEDED,
            RegistryErrorCode.INVALID_TITLE,
            RegistryErrorCode.INVALID_DESCRIPTION,
            RegistryErrorCode.INVALID_TARGET,
            RegistryErrorCode.INVALID_DEADLINE,
            RegistryErrorCode.INVALID_CATEGORY,
            RegistryErrorCode.INVALID_PRIORITY,
            RegistryErrorCode.INVALID_LOCATION,
            RegistryErrorCode.INVALID_TAGS,
            RegistryErrorCode.INVALID_MIN_SIGNATURES,
            RegistryErrorCode.INVALID_MAX_EXTENSION,
            RegistryErrorCode.PETITION_ALREADY_EXISTS,
            RegistryErrorCode.AUTHORITY_NOT_SET,
        ]


class TestUpdateRules:
    def test_valid_update(self) -> None:
        petition = make_petition()

        assert (
            petition_validator.check_update(
                petition, petition.creator, "New title", "New body", 60, TitleIndex()
            )
            is None
        )

    def test_missing_petition(self) -> None:
        assert (
            petition_validator.check_update(None, "SP", "t", "d", 1, TitleIndex())
            == RegistryErrorCode.PETITION_NOT_FOUND
        )

    def test_creator_checked_before_state(self) -> None:
        petition = make_petition().closed()

        assert (
            petition_validator.check_update(petition, "SPOTHER", "t", "d", 60, TitleIndex())
            == RegistryErrorCode.NOT_AUTHORIZED
        )

    def test_closed_petition(self) -> None:
        petition = make_petition().closed()

        assert (
            petition_validator.check_update(
                petition, petition.creator, "t", "d", 60, TitleIndex()
            )
            == RegistryErrorCode.PETITION_CLOSED
        )

    @pytest.mark.parametrize(
        ("title", "description", "target", "expected"),
        [
            ("", "d", 60, RegistryErrorCode.INVALID_TITLE),
            ("t", "", 60, RegistryErrorCode.INVALID_DESCRIPTION),
            ("t", "d", 0, RegistryErrorCode.INVALID_TARGET),
        ],
    )
    def test_invalid_content(
        self, title: str, description: str, target: int, expected: RegistryErrorCode
    ) -> None:
        petition = make_petition()

        assert (
            petition_validator.check_update(
                petition, petition.creator, title, description, target, TitleIndex()
            )
            == expected
        )

    def test_target_below_current_signatures(self) -> None:
        petition = make_petition(current_signatures=30)

        assert (
            petition_validator.check_update(
                petition, petition.creator, "t", "d", 29, TitleIndex()
            )
            == RegistryErrorCode.INVALID_TARGET
        )

    def test_title_held_by_other_petition(self) -> None:
        petition = make_petition(petition_id=0)
        index = TitleIndex({petition.title: 0, "Taken": 1})

        assert (
            petition_validator.check_update(
                petition, petition.creator, "Taken", "d", 60, index
            )
            == RegistryErrorCode.PETITION_ALREADY_EXISTS
        )

    def test_keeping_own_title_is_allowed(self) -> None:
        petition = make_petition(petition_id=0)
        index = TitleIndex({petition.title: 0})

        assert (
            petition_validator.check_update(
                petition, petition.creator, petition.title, "d", 60, index
            )
            is None
        )


class TestCloseAndIncrementRules:
    def test_close_rules(self) -> None:
        petition = make_petition()

        assert petition_validator.check_close(petition, petition.creator) is None
        assert petition_validator.check_close(None, "SP") == RegistryErrorCode.PETITION_NOT_FOUND
        assert (
            petition_validator.check_close(petition, "SPOTHER")
            == RegistryErrorCode.NOT_AUTHORIZED
        )
        assert (
            petition_validator.check_close(petition.closed(), petition.creator)
            == RegistryErrorCode.PETITION_CLOSED
        )

    def test_increment_rules(self) -> None:
        petition = make_petition(target_signatures=50, current_signatures=45)

        assert petition_validator.check_signature_increment(petition, 5) is None
        assert (
            petition_validator.check_signature_increment(petition, 6)
            == RegistryErrorCode.INVALID_UPDATE_PARAM
        )
        assert (
            petition_validator.check_signature_increment(petition, 0)
            == RegistryErrorCode.INVALID_INPUT
        )
        assert (
            petition_validator.check_signature_increment(petition, -1)
            == RegistryErrorCode.INVALID_INPUT
        )
        assert (
            petition_validator.check_signature_increment(None, 1)
            == RegistryErrorCode.PETITION_NOT_FOUND
        )
        assert (
            petition_validator.check_signature_increment(petition.closed(), 1)
            == RegistryErrorCode.PETITION_CLOSED
        )
