import unittest

import contracts.command_contract as command_contract
from contracts.command_contract import (
    COMMAND_NAMES,
    GROWTH_COMMAND_NAMES,
    HEALTH_COMMAND_NAMES,
    HISTORY_COMMAND_NAMES,
    MILK_STASH_COMMAND_NAMES,
    REMINDER_COMMAND_NAMES,
    TIMER_COMMAND_TO_RUNTIME_ACTION,
)
from tracker import constants as tracker_constants


class CommandContractConsistencyTests(unittest.TestCase):
    def test_command_groups_do_not_overlap(self) -> None:
        groups = [
            set(TIMER_COMMAND_TO_RUNTIME_ACTION),
            set(HISTORY_COMMAND_NAMES),
            set(REMINDER_COMMAND_NAMES),
            set(GROWTH_COMMAND_NAMES),
            set(MILK_STASH_COMMAND_NAMES),
            set(HEALTH_COMMAND_NAMES),
        ]
        self.assertEqual(sum(len(group) for group in groups), len(COMMAND_NAMES))

    def test_every_command_constant_is_routed(self) -> None:
        declared = {
            value
            for name, value in vars(command_contract).items()
            if name.startswith("COMMAND_") and isinstance(value, str)
        }
        self.assertEqual(declared, set(COMMAND_NAMES))

    def test_timer_commands_map_to_known_actions(self) -> None:
        actions = {
            value
            for name, value in vars(tracker_constants).items()
            if name.startswith("ACTION_")
        }
        for action in TIMER_COMMAND_TO_RUNTIME_ACTION.values():
            self.assertIn(action, actions)


if __name__ == "__main__":
    unittest.main()
