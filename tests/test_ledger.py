"""Tests for crediting and selling cards."""
import pytest
from sqlalchemy import select

from database import crud
from database.crud_cards import credit_cards, sell_card
from database.models import PlayerCard
from game.constants import DEFAULT_PLAYER_ID
from game.errors import CardNotOwnedError, PlayerNotFoundError


async def test_credit_creates_and_aggregates_duplicates(session, session_factory, player, make_pack):
    _, cards = await make_pack({"CardA": (0.5, 10), "CardB": (0.5, 20)})
    card_a, card_b = cards["CardA"], cards["CardB"]

    quantities = await credit_cards(session, player.id, [card_a.id, card_b.id, card_a.id])
    await session.commit()

    assert quantities == {card_a.id: 2, card_b.id: 1}
    async with session_factory() as check:
        rows = (await check.execute(select(PlayerCard))).scalars().all()
        assert {row.card_id: row.quantity for row in rows} == {card_a.id: 2, card_b.id: 1}
        assert all(row.first_obtained_at is not None for row in rows)


async def test_credit_increments_existing_entry(session, session_factory, player, make_pack):
    _, cards = await make_pack({"CardA": (1.0, 10)})
    card_a = cards["CardA"]

    await credit_cards(session, player.id, [card_a.id])
    await session.commit()
    async with session_factory() as check:
        first = await crud.get_player_card(check, player.id, card_a.id)

    await credit_cards(session, player.id, [card_a.id, card_a.id])
    await session.commit()

    async with session_factory() as check:
        entry = await crud.get_player_card(check, player.id, card_a.id)
        rows = (await check.execute(select(PlayerCard))).scalars().all()

    assert entry.quantity == 3
    assert len(rows) == 1
    assert entry.first_obtained_at == first.first_obtained_at
    assert entry.updated_at >= first.updated_at


async def test_credit_for_unknown_player_fails(session, make_pack):
    _, cards = await make_pack({"CardA": (1.0, 10)})

    with pytest.raises(PlayerNotFoundError):
        await credit_cards(session, 42, [cards["CardA"].id])


async def test_sell_decrements_and_credits_balance(session, session_factory, player, make_pack):
    _, cards = await make_pack({"CardA": (1.0, 10)})
    card_a = cards["CardA"]
    await credit_cards(session, player.id, [card_a.id, card_a.id])
    await session.commit()

    sale = await sell_card(session, player.id, card_a.id)

    assert sale.price_received == 10
    assert sale.new_balance == 110
    assert sale.remaining_quantity == 1
    assert sale.card.name == "CardA"
    async with session_factory() as check:
        assert (await crud.get_player_card(check, player.id, card_a.id)).quantity == 1
        assert await crud.get_player_balance(check, player.id) == 110


async def test_selling_last_unit_removes_entry(session, session_factory, player, make_pack):
    _, cards = await make_pack({"CardF": (1.0, 500)})
    card_f = cards["CardF"]
    await credit_cards(session, player.id, [card_f.id])
    await session.commit()

    sale = await sell_card(session, player.id, card_f.id)

    assert sale.remaining_quantity == 0
    assert sale.new_balance == 600
    async with session_factory() as check:
        assert await crud.get_player_card(check, player.id, card_f.id) is None
        assert await crud.get_player_inventory(check, player.id) == []
        assert await crud.get_player_balance(check, player.id) == 600


async def test_selling_unowned_card_changes_nothing(session, session_factory, player, make_pack):
    _, cards = await make_pack({"CardA": (0.5, 10), "CardB": (0.5, 20)})
    # Откат expire-ит объекты сессии, id сохраняем заранее
    player_id, card_a_id, card_b_id = player.id, cards["CardA"].id, cards["CardB"].id
    await credit_cards(session, player_id, [card_a_id])
    await session.commit()

    with pytest.raises(CardNotOwnedError) as exc_info:
        await sell_card(session, player_id, card_b_id)

    assert exc_info.value.status_code == 404
    async with session_factory() as check:
        assert await crud.get_player_balance(check, player_id) == 100
        inventory = await crud.get_player_inventory(check, player_id)
        assert [(item.card_id, item.quantity) for item in inventory] == [(card_a_id, 1)]


async def test_selling_after_running_out_fails(session, player, make_pack):
    _, cards = await make_pack({"CardA": (1.0, 10)})
    player_id, card_a_id = player.id, cards["CardA"].id
    await credit_cards(session, player_id, [card_a_id])
    await session.commit()

    await sell_card(session, player_id, card_a_id)
    with pytest.raises(CardNotOwnedError):
        await sell_card(session, player_id, card_a_id)

    # Та же сессия пригодна для работы после отката
    assert await crud.get_player_balance(session, player_id) == 110
    await session.refresh(player)
    assert player.balance == 110


async def test_sale_is_rolled_back_when_balance_credit_fails(session, session_factory, make_pack):
    _, cards = await make_pack({"CardA": (1.0, 10)})
    card_a_id = cards["CardA"].id
    # Строка инвентаря без записи player_state: списание пройдёт, начисление - нет
    session.add(PlayerCard(player_id=DEFAULT_PLAYER_ID, card_id=card_a_id, quantity=1))
    await session.commit()

    with pytest.raises(PlayerNotFoundError):
        await sell_card(session, DEFAULT_PLAYER_ID, card_a_id)

    async with session_factory() as check:
        entry = await crud.get_player_card(check, DEFAULT_PLAYER_ID, card_a_id)
        assert entry.quantity == 1
