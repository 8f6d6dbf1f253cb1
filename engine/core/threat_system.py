# engine/core/threat_system.py
"""
Centralized threat (aggro) bookkeeping for party members.

Each actor carries a non-negative threat score. Enemies pick their targets
with a random draw weighted by those scores, so whoever deals damage, heals
or lands states draws more attacks. The party never owns threat; it only
sums it on demand over living members.
"""
import math
import random
from typing import Any, Optional, List, TYPE_CHECKING

from engine.config import (
    THREAT_PER_LEVEL, DEFAULT_THREAT_PER_LEVEL, EVADE_THREAT_PER_LEVEL,
    THREAT_GATE_PERCENTAGE
)
from engine.core.errors import ThreatValueError
from engine.utils.logger import Logger

if TYPE_CHECKING:
    from engine.core.battle_actor import BattleActor, BattleParty


class ThreatSystem:
    @staticmethod
    def validate_amount(value: Any, what: str = "amount") -> float:
        """Returns value as a float, rejecting booleans, non-numbers, NaN and infinities."""
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ThreatValueError(f"Threat {what} must be a number, got {value!r}")
        if not math.isfinite(value):
            raise ThreatValueError(f"Threat {what} must be finite, got {value!r}")
        return float(value)

    @staticmethod
    def setup(actor: 'BattleActor', level: Optional[int] = None,
              target_rate: Optional[float] = None) -> float:
        """Sets the starting threat: level * 100 * target rate."""
        level = ThreatSystem.validate_amount(actor.level if level is None else level, "level")
        rate = ThreatSystem.validate_amount(
            actor.target_rate if target_rate is None else target_rate, "target rate")
        actor.threat = max(0.0, level * THREAT_PER_LEVEL * rate)
        Logger.debug("Threat", f"{actor.name} starts with {actor.threat:.1f} threat")
        return actor.threat

    @staticmethod
    def threat_sum(party: Optional['BattleParty']) -> float:
        if party is None:
            return 0.0
        return sum(member.threat for member in party.alive_members())

    @staticmethod
    def threat_percentage(actor: 'BattleActor', party: Optional['BattleParty'] = None) -> int:
        """Rounded share of the party's threat held by actor. 0 when the party holds none."""
        party = party if party is not None else getattr(actor, "party", None)
        total = ThreatSystem.threat_sum(party)
        if total <= 0:
            return 0
        # Round half up
        return int(math.floor(actor.threat / total * 100 + 0.5))

    @staticmethod
    def add_threat(actor: 'BattleActor', amount: Any, party: Optional['BattleParty'] = None) -> bool:
        """
        Adds |amount| * target rate unless the actor already holds the gate
        percentage of party threat. The gate is read before adding, so a single
        large increment may push past it.

        Returns True if the score changed.
        """
        amount = abs(ThreatSystem.validate_amount(amount))
        if amount == 0:
            return False
        if ThreatSystem.threat_percentage(actor, party) >= THREAT_GATE_PERCENTAGE:
            return False
        gained = amount * actor.target_rate
        if gained <= 0:
            return False
        old = actor.threat
        actor.threat = old + gained
        Logger.debug("Threat", f"{actor.name} threat {old:.1f} -> {actor.threat:.1f}")
        return True

    @staticmethod
    def remove_threat(actor: 'BattleActor', amount: Any) -> bool:
        """Removes |amount| / target rate, never going below zero. Returns True if the score changed."""
        amount = abs(ThreatSystem.validate_amount(amount))
        if amount == 0 or actor.threat <= 0:
            return False
        old = actor.threat
        if actor.target_rate <= 0:
            # Dividing by a zero rate removes everything
            actor.threat = 0.0
        else:
            actor.threat = max(0.0, old - amount / actor.target_rate)
        Logger.debug("Threat", f"{actor.name} threat {old:.1f} -> {actor.threat:.1f}")
        return actor.threat != old

    @staticmethod
    def add_default_threat(actor: 'BattleActor', party: Optional['BattleParty'] = None) -> bool:
        return ThreatSystem.add_threat(actor, actor.level * DEFAULT_THREAT_PER_LEVEL, party)

    # --- Target Selection ---

    @staticmethod
    def random_enemy_target(party: 'BattleParty', rng: Optional[random.Random] = None) -> Optional['BattleActor']:
        """
        Picks the party member an enemy attacks, weighted by threat.
        Falls back to a uniform pick when every living member has zero threat.
        """
        rng = rng or random
        members: List['BattleActor'] = party.alive_members()
        if not members:
            return None

        total = sum(m.threat for m in members)
        if total <= 0:
            return rng.choice(members)

        roll = rng.random() * total
        chosen = None
        for member in members:
            if member.threat <= 0:
                continue
            chosen = member
            roll -= member.threat
            if roll <= 0:
                break
        return chosen

    @staticmethod
    def random_ally_target(party: 'BattleParty', rng: Optional[random.Random] = None) -> Optional['BattleActor']:
        """Picks a living member uniformly (friendly heals and buffs ignore threat)."""
        rng = rng or random
        members = party.alive_members()
        if not members:
            return None
        return rng.choice(members)

    # --- Combat Events ---

    @staticmethod
    def on_damage_executed(subject: Any, value: Any) -> bool:
        """Damage dealt by a party member draws threat proportional to the damage."""
        value = ThreatSystem.validate_amount(value, "damage")
        if not getattr(subject, "is_actor", False):
            return False
        return ThreatSystem.add_threat(subject, value)

    @staticmethod
    def on_hp_recovered(subject: Any, target: Any, value1: Any, value2: Any,
                        is_item: bool = False) -> bool:
        """
        Healing draws threat to whoever performed it:
        target.mhp * value1 + value2, scaled by the subject's pharmacology for items.
        """
        rate = ThreatSystem.validate_amount(value1, "recovery rate")
        flat = ThreatSystem.validate_amount(value2, "recovery value")
        value = target.mhp * rate + flat
        if is_item:
            value *= getattr(subject, "pha", 1.0)
        value = math.floor(value)
        if value == 0 or not getattr(subject, "is_actor", False):
            return False
        return ThreatSystem.add_threat(subject, value)

    @staticmethod
    def on_state_added(subject: Any, item_threat: Any = None, is_guard: bool = False,
                       success: bool = True) -> bool:
        """A state landed by a party member adds the item's threat value, or the default."""
        if not getattr(subject, "is_actor", False) or is_guard or not success:
            return False
        if item_threat:
            return ThreatSystem.add_threat(subject, item_threat)
        return ThreatSystem.add_default_threat(subject)

    @staticmethod
    def on_action_evaded(target: Any) -> bool:
        """A party member that evades an enemy action sheds threat."""
        if not getattr(target, "is_actor", False):
            return False
        return ThreatSystem.remove_threat(target, target.level * EVADE_THREAT_PER_LEVEL)
