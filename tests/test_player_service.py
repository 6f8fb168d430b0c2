"""Player service tests."""

from __future__ import annotations

import pytest

from app.services.player_service import PlayerService
from app.utils.errors import ConflictError, InvalidInputError, NotFoundError


def test_create_player_starts_at_zero(fake_client) -> None:
    """New players get an id, a trimmed name and no balance."""
    player = PlayerService(fake_client).create_player("  Dana ")

    assert player.id
    assert player.name == "Dana"
    assert player.balance == 0.0


def test_blank_name_is_rejected(fake_client) -> None:
    with pytest.raises(InvalidInputError):
        PlayerService(fake_client).create_player("   ")


def test_players_are_listed_by_name(fake_client) -> None:
    service = PlayerService(fake_client)
    for name in ("Zed", "Amy", "Kim"):
        service.create_player(name)

    assert [player.name for player in service.list_players()] == ["Amy", "Kim", "Zed"]


def test_rename_missing_player(fake_client) -> None:
    with pytest.raises(NotFoundError):
        PlayerService(fake_client).rename_player("ghost", "Casper")


def test_delete_requires_settled_balance(fake_client) -> None:
    """Players with money outstanding cannot be removed."""
    service = PlayerService(fake_client)
    player = service.create_player("Dana")
    service.apply_deltas({player.id: -12.5})

    with pytest.raises(ConflictError) as excinfo:
        service.delete_player(player.id)
    assert excinfo.value.code == "BALANCE_OUTSTANDING"

    service.apply_deltas({player.id: -12.5}, reverse=True)
    service.delete_player(player.id)
    assert service.list_players() == []


def test_apply_deltas_skips_unknown_players(fake_client) -> None:
    service = PlayerService(fake_client)
    player = service.create_player("Dana")

    updated = service.apply_deltas({player.id: 4.25, "ghost": 1.0})

    assert [(p.id, p.balance) for p in updated] == [(player.id, 4.25)]


def test_reset_balances(fake_client) -> None:
    service = PlayerService(fake_client)
    first = service.create_player("Amy")
    second = service.create_player("Kim")
    service.apply_deltas({first.id: 3.0, second.id: -3.0})

    service.reset_balances()

    assert [player.balance for player in service.list_players()] == [0.0, 0.0]
