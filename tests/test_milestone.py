"""Tests for milestone evaluation."""

from decimal import Decimal

from savetrack.domain.milestone import MilestoneService, milestone_target_amount


def test_milestone_target_amount():
    assert milestone_target_amount(Decimal("1000"), 25) == Decimal("250")
    assert milestone_target_amount(Decimal("333"), 50) == Decimal("166.5")


def test_boundary_reaches_milestone(milestone_service, sample_goal):
    percentage = milestone_service.check_milestone_achievements(
        sample_goal.id, Decimal("250"), Decimal("1000")
    )

    assert percentage == 25
    assert milestone_service.next_milestone(sample_goal.id).percentage == 50


def test_below_first_milestone(milestone_service, sample_goal):
    percentage = milestone_service.check_milestone_achievements(
        sample_goal.id, Decimal("249.99"), Decimal("1000")
    )

    assert percentage is None
    assert milestone_service.next_milestone(sample_goal.id).percentage == 25


def test_non_positive_target_flags_nothing(milestone_service, temp_db, sample_goal):
    assert milestone_service.check_milestone_achievements(sample_goal.id, Decimal("500"), Decimal("0")) is None
    assert not any(m.is_achieved for m in temp_db.list_milestones(sample_goal.id))


def test_achievement_records_amount(milestone_service, temp_db, sample_goal):
    milestone_service.check_milestone_achievements(sample_goal.id, Decimal("980"), Decimal("1000"))

    [first] = temp_db.list_milestones(sample_goal.id, achieved=True)
    assert first.percentage == 25
    assert first.achieved_amount == Decimal("980")
    assert first.notified is False


def test_next_milestone_none_when_all_achieved(milestone_service, sample_goal):
    flagged = [
        milestone_service.check_milestone_achievements(sample_goal.id, Decimal("1000"), Decimal("1000"))
        for _ in range(5)
    ]

    assert flagged == [25, 50, 75, 100, None]
    assert milestone_service.next_milestone(sample_goal.id) is None


def test_celebration_message():
    assert MilestoneService.celebration_message(75) == "Congratulations! You've reached 75% of your goal!"
