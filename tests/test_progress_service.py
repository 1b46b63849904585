"""Tests for progress recording."""

from decimal import Decimal

import pytest

from savetrack.domain.errors import NotFoundError

USER = "alice"
OTHER_USER = "bob"


def _set_and_update(account_service, progress_service, account_id, goal_id, balance, **kwargs):
    account_service.set_balance(account_id, USER, Decimal(balance))
    return progress_service.update_goal_progress(goal_id, USER, **kwargs)


def test_update_records_change(account_service, progress_service, goal_service, sample_goal, sample_account):
    result = _set_and_update(
        account_service, progress_service, sample_account.id, sample_goal.id, "120.55",
        transaction_id="tx-1",
    )

    assert result.previous_amount == Decimal("0.00")
    assert result.new_amount == Decimal("120.55")
    assert result.change_amount == Decimal("120.55")
    assert result.progress_percentage == Decimal("12.06")
    assert result.milestone_triggered is None
    assert goal_service.get_goal(USER, sample_goal.id).current_amount == Decimal("120.55")

    [entry] = goal_service.get_progress_history(USER, sample_goal.id)
    assert entry.previous_amount == Decimal("0.00")
    assert entry.new_amount == Decimal("120.55")
    assert entry.account_balance == Decimal("120.55")
    assert entry.transaction_id == "tx-1"


def test_negative_change(account_service, progress_service, sample_goal, sample_account):
    _set_and_update(account_service, progress_service, sample_account.id, sample_goal.id, "500")

    result = _set_and_update(account_service, progress_service, sample_account.id, sample_goal.id, "350.25")

    assert result.change_amount == Decimal("-149.75")
    assert result.progress_percentage == Decimal("35.03")


def test_percentage_clamped(account_service, progress_service, sample_goal, sample_account):
    result = _set_and_update(account_service, progress_service, sample_account.id, sample_goal.id, "1500")
    assert result.progress_percentage == Decimal("100.00")

    result = _set_and_update(account_service, progress_service, sample_account.id, sample_goal.id, "-20")
    assert result.progress_percentage == Decimal("0.00")


def test_history_append_only(account_service, progress_service, goal_service, sample_goal, sample_account):
    _set_and_update(account_service, progress_service, sample_account.id, sample_goal.id, "100")
    first = goal_service.get_progress_history(USER, sample_goal.id)[0]

    for balance in ("200", "150", "400"):
        _set_and_update(account_service, progress_service, sample_account.id, sample_goal.id, balance)

    history = goal_service.get_progress_history(USER, sample_goal.id)
    assert len(history) == 4
    assert history[-1] == first
    assert [e.new_amount for e in history] == [Decimal("400"), Decimal("150"), Decimal("200"), Decimal("100")]


def test_single_milestone_per_call(account_service, progress_service, goal_service, sample_goal, sample_account):
    result = _set_and_update(account_service, progress_service, sample_account.id, sample_goal.id, "600")
    assert result.milestone_triggered == 25

    result = progress_service.update_goal_progress(sample_goal.id, USER)
    assert result.milestone_triggered == 50

    result = progress_service.update_goal_progress(sample_goal.id, USER)
    assert result.milestone_triggered is None

    achieved = [m.percentage for m in goal_service.list_milestones(USER, sample_goal.id) if m.is_achieved]
    assert achieved == [25, 50]


def test_milestones_never_revert(account_service, progress_service, goal_service, sample_goal, sample_account):
    _set_and_update(account_service, progress_service, sample_account.id, sample_goal.id, "300")

    result = _set_and_update(account_service, progress_service, sample_account.id, sample_goal.id, "10")

    assert result.milestone_triggered is None
    [first, *rest] = goal_service.list_milestones(USER, sample_goal.id)
    assert first.is_achieved is True
    assert first.achieved_amount == Decimal("300")
    assert first.achieved_at is not None
    assert not any(m.is_achieved for m in rest)


def test_missing_goal(progress_service, sample_goal):
    with pytest.raises(NotFoundError):
        progress_service.update_goal_progress(sample_goal.id, OTHER_USER)
    with pytest.raises(NotFoundError):
        progress_service.update_goal_progress(4242, USER)


def test_failure_leaves_no_partial_state(
    account_service, progress_service, goal_service, sample_goal, sample_account, monkeypatch
):
    account_service.set_balance(sample_account.id, USER, Decimal("700"))

    def explode(*args, **kwargs):
        raise RuntimeError("milestone store unavailable")

    monkeypatch.setattr(progress_service.milestones, "check_milestone_achievements", explode)

    with pytest.raises(RuntimeError):
        progress_service.update_goal_progress(sample_goal.id, USER)

    assert goal_service.get_goal(USER, sample_goal.id).current_amount == Decimal("0.00")
    assert goal_service.get_progress_history(USER, sample_goal.id) == []


def test_sync_account_goals_skips_inactive(
    account_service, progress_service, goal_service, sample_goal, sample_account, future_date
):
    paused = goal_service.create_goal(
        USER, account_id=sample_account.id, name="Paused", target_amount=Decimal("50"), target_date=future_date
    )
    goal_service.update_goal(USER, paused.id, status="paused")
    account_service.set_balance(sample_account.id, USER, Decimal("260"))

    results = progress_service.sync_account_goals(sample_account.id, USER, transaction_id="tx-9")

    assert [r.goal_id for r in results] == [sample_goal.id]
    assert results[0].milestone_triggered == 25
    assert goal_service.get_goal(USER, paused.id).current_amount == Decimal("0.00")
    assert goal_service.get_progress_history(USER, sample_goal.id)[0].transaction_id == "tx-9"


def test_sync_unknown_account(progress_service, sample_account):
    with pytest.raises(NotFoundError):
        progress_service.sync_account_goals(sample_account.id, OTHER_USER)
