# engine/core/battle_actor.py
"""
Minimal battler and party objects exposing what the threat system reads:
level, target rate, max HP, pharmacology, alive state and party membership.
A host engine can pass its own objects instead as long as they carry the
same attributes.
"""
from typing import List, Optional, Iterable


class BattleActor:
    def __init__(self, name: str, level: int = 1, target_rate: float = 1.0,
                 mhp: int = 100, hp: Optional[int] = None, pha: float = 1.0,
                 is_actor: bool = True):
        self.name = name
        self.level = level
        self.target_rate = target_rate  # 'tgr': scales threat gained and lost
        self.mhp = mhp
        self.hp = mhp if hp is None else hp
        self.pha = pha  # Pharmacology: potency of items used by this battler
        self.is_actor = is_actor  # False for enemies
        self.threat: float = 0.0
        self.party: Optional['BattleParty'] = None

    @property
    def is_alive(self) -> bool:
        return self.hp > 0

    def take_damage(self, amount: int) -> int:
        actual = max(0, min(self.hp, amount))
        self.hp -= actual
        return actual

    def __repr__(self) -> str:
        return f"BattleActor({self.name!r}, lv={self.level}, threat={self.threat:.1f})"


class BattleParty:
    def __init__(self, members: Optional[Iterable[BattleActor]] = None):
        self.members: List[BattleActor] = []
        for member in members or []:
            self.add_member(member)

    def add_member(self, actor: BattleActor) -> None:
        if actor in self.members:
            return
        actor.party = self
        self.members.append(actor)

    def alive_members(self) -> List[BattleActor]:
        """Living members in party order."""
        return [m for m in self.members if m.is_alive]
