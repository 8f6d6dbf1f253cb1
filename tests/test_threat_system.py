# tests/test_threat_system.py
import math

from tests.fixtures import PartyTestBase
from engine.core.battle_actor import BattleActor, BattleParty
from engine.core.errors import ThreatValueError
from engine.core.threat_system import ThreatSystem


class TestThreatSetup(PartyTestBase):

    def test_setup_uses_level_and_target_rate(self):
        """Starting threat is level * 100 * target rate."""
        self.assertEqual(ThreatSystem.setup(self.tank), 1000.0)
        self.assertEqual(self.tank.threat, 1000.0)
        self.assertEqual(ThreatSystem.setup(self.mage), 200.0)

    def test_setup_accepts_explicit_values(self):
        ThreatSystem.setup(self.healer, level=10, target_rate=1.5)
        self.assertEqual(self.healer.threat, 1500.0)

    def test_setup_rejects_non_finite_rate(self):
        with self.assertRaises(ThreatValueError):
            ThreatSystem.setup(self.healer, target_rate=float("nan"))


class TestThreatPercentage(PartyTestBase):

    def test_equal_scores_split_evenly(self):
        party = BattleParty([BattleActor("A"), BattleActor("B")])
        a, b = party.members
        a.threat, b.threat = 50, 50
        self.assertEqual(ThreatSystem.threat_percentage(a), 50)
        self.assertEqual(ThreatSystem.threat_percentage(b), 50)

    def test_empty_party_threat_is_zero_percent(self):
        """No threat anywhere in the party reports 0 instead of dividing by zero."""
        self.assertEqual(ThreatSystem.threat_percentage(self.tank), 0)
        lone = BattleActor("Lone")
        self.assertEqual(ThreatSystem.threat_percentage(lone), 0)

    def test_dead_members_do_not_count(self):
        self.tank.threat, self.healer.threat, self.mage.threat = 50, 50, 900
        self.mage.hp = 0
        self.assertEqual(ThreatSystem.threat_sum(self.party), 100)
        self.assertEqual(ThreatSystem.threat_percentage(self.tank), 50)

    def test_all_dead_party_is_zero_percent(self):
        for member in self.party.members:
            member.threat = 100
            member.hp = 0
        self.assertEqual(ThreatSystem.threat_percentage(self.tank), 0)

    def test_rounds_half_up(self):
        party = BattleParty([BattleActor("X"), BattleActor("Y")])
        x, y = party.members
        x.threat, y.threat = 1, 7  # 12.5%
        self.assertEqual(ThreatSystem.threat_percentage(x), 13)

    def test_monotonic_with_fixed_sum(self):
        """Shifting threat onto an actor never lowers its share, and it stays within 0..100."""
        last = -1
        for score in range(0, 101, 5):
            self.tank.threat = score
            self.healer.threat = 100 - score
            self.mage.threat = 0
            pct = ThreatSystem.threat_percentage(self.tank)
            self.assertGreaterEqual(pct, last)
            self.assertTrue(0 <= pct <= 100)
            last = pct
        self.assertEqual(last, 100)


class TestThreatMutation(PartyTestBase):

    def setUp(self):
        super().setUp()
        self.tank.threat, self.healer.threat, self.mage.threat = 100, 100, 100

    def test_add_threat_scales_by_target_rate(self):
        self.assertTrue(ThreatSystem.add_threat(self.tank, 50))
        self.assertEqual(self.tank.threat, 200)
        ThreatSystem.add_threat(self.mage, 50)
        self.assertEqual(self.mage.threat, 125)

    def test_add_threat_uses_magnitude(self):
        ThreatSystem.add_threat(self.healer, -40)
        self.assertEqual(self.healer.threat, 140)

    def test_add_threat_gated_at_99_percent(self):
        """An actor holding 99% of party threat gains nothing more."""
        self.tank.threat, self.healer.threat, self.mage.threat = 99, 1, 0
        self.assertEqual(ThreatSystem.threat_percentage(self.tank), 99)
        for _ in range(3):
            self.assertFalse(ThreatSystem.add_threat(self.tank, 500))
        self.assertEqual(self.tank.threat, 99)

        # Others are still free to catch up
        self.assertTrue(ThreatSystem.add_threat(self.healer, 10))
        self.assertEqual(self.healer.threat, 11)

    def test_single_large_add_can_overshoot_gate(self):
        """The gate is read before adding, so one big hit passes it; the next is blocked."""
        self.tank.threat, self.healer.threat, self.mage.threat = 98, 2, 0
        self.assertTrue(ThreatSystem.add_threat(self.tank, 1000))
        self.assertEqual(self.tank.threat, 2098)
        self.assertGreaterEqual(ThreatSystem.threat_percentage(self.tank), 99)
        self.assertFalse(ThreatSystem.add_threat(self.tank, 1))

    def test_remove_threat_divides_by_target_rate(self):
        ThreatSystem.remove_threat(self.tank, 50)
        self.assertEqual(self.tank.threat, 75)
        ThreatSystem.remove_threat(self.mage, 20)
        self.assertEqual(self.mage.threat, 60)

    def test_remove_threat_floors_at_zero(self):
        ThreatSystem.remove_threat(self.healer, 10_000)
        self.assertEqual(self.healer.threat, 0)
        self.assertFalse(ThreatSystem.remove_threat(self.healer, 5))
        self.assertEqual(self.healer.threat, 0)

    def test_remove_threat_with_zero_rate_clears_score(self):
        self.healer.target_rate = 0
        ThreatSystem.remove_threat(self.healer, 1)
        self.assertEqual(self.healer.threat, 0)

    def test_add_default_threat(self):
        """Default threat is level * 50 before the target rate applies."""
        ThreatSystem.add_default_threat(self.healer)
        self.assertEqual(self.healer.threat, 300)

    def test_zero_amounts_are_no_ops(self):
        self.assertFalse(ThreatSystem.add_threat(self.tank, 0))
        self.assertFalse(ThreatSystem.remove_threat(self.tank, 0.0))
        self.assertEqual(self.tank.threat, 100)

    def test_non_finite_input_is_rejected(self):
        for bad in (float("nan"), float("inf"), float("-inf"), "12", None, True):
            with self.assertRaises(ThreatValueError, msg=repr(bad)):
                ThreatSystem.add_threat(self.tank, bad)
            with self.assertRaises(ThreatValueError, msg=repr(bad)):
                ThreatSystem.remove_threat(self.tank, bad)
        self.assertEqual(self.tank.threat, 100)

    def test_add_then_remove_stays_bounded(self):
        for amount in (0, 1, 7.5, 40, 333):
            for actor in self.party.members:
                before = actor.threat
                ThreatSystem.add_threat(actor, amount)
                ThreatSystem.remove_threat(actor, amount)
                self.assertGreaterEqual(actor.threat, 0)
                limit = before + amount * actor.target_rate - amount / actor.target_rate
                self.assertLessEqual(actor.threat, max(limit, 0) + 1e-9)


class TestCombatEvents(PartyTestBase):

    def setUp(self):
        super().setUp()
        self.tank.threat, self.healer.threat, self.mage.threat = 100, 100, 100
        self.enemy = BattleActor("Shade", level=8, is_actor=False)

    def test_damage_by_actor_adds_threat(self):
        ThreatSystem.on_damage_executed(self.tank, 30)
        self.assertEqual(self.tank.threat, 160)

    def test_damage_by_enemy_is_ignored(self):
        self.assertFalse(ThreatSystem.on_damage_executed(self.enemy, 30))
        self.assertEqual(self.enemy.threat, 0)

    def test_heal_adds_threat_to_healer(self):
        target = BattleActor("Patient", mhp=200)
        ThreatSystem.on_hp_recovered(self.healer, target, 0.1, 5)
        self.assertEqual(self.healer.threat, 125)

    def test_item_heal_scales_by_pharmacology(self):
        target = BattleActor("Patient", mhp=200)
        # floor((200 * 0.1 + 5) * 1.5) = 37, times target rate 0.5
        ThreatSystem.on_hp_recovered(self.mage, target, 0.1, 5, is_item=True)
        self.assertEqual(self.mage.threat, 118.5)

    def test_zero_heal_is_ignored(self):
        target = BattleActor("Patient", mhp=200)
        self.assertFalse(ThreatSystem.on_hp_recovered(self.healer, target, 0, 0))
        self.assertEqual(self.healer.threat, 100)

    def test_state_uses_item_threat_or_default(self):
        ThreatSystem.on_state_added(self.healer, item_threat=30)
        self.assertEqual(self.healer.threat, 130)
        ThreatSystem.on_state_added(self.healer)
        self.assertEqual(self.healer.threat, 330)

    def test_state_ignored_for_guard_failure_or_enemy(self):
        self.assertFalse(ThreatSystem.on_state_added(self.healer, is_guard=True))
        self.assertFalse(ThreatSystem.on_state_added(self.healer, success=False))
        self.assertFalse(ThreatSystem.on_state_added(self.enemy))
        self.assertEqual(self.healer.threat, 100)

    def test_evade_removes_threat(self):
        # level 5 * 50 / target rate 2
        ThreatSystem.on_action_evaded(self.tank)
        self.assertEqual(self.tank.threat, 0)
        self.healer.threat = 500
        ThreatSystem.on_action_evaded(self.healer)
        self.assertTrue(math.isclose(self.healer.threat, 300))


class TestFallenMembers(PartyTestBase):

    def test_take_damage_is_capped_at_remaining_hp(self):
        self.assertEqual(self.tank.take_damage(30), 30)
        self.assertEqual(self.tank.hp, 70)
        self.assertEqual(self.tank.take_damage(500), 70)
        self.assertEqual(self.tank.hp, 0)
        self.assertFalse(self.tank.is_alive)
        self.assertEqual(self.tank.take_damage(10), 0)

    def test_fallen_member_leaves_threat_share(self):
        self.tank.threat, self.healer.threat, self.mage.threat = 50, 30, 20
        self.tank.take_damage(self.tank.mhp)

        self.assertEqual(self.party.alive_members(), [self.healer, self.mage])
        self.assertEqual(ThreatSystem.threat_sum(self.party), 50)
        self.assertEqual(ThreatSystem.threat_percentage(self.healer), 60)
