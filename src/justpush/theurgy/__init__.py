"""
Theurgy - Command implementations for JustPush.

Each module corresponds to a top-level CLI command:
- create_group: Create a notification group and read it back
- notify:       Send a direct notification to a receiver
- read:         Read a group record from contract state
"""
