"""
Utility Scripts.

- chat_discovery.py: Run a discovery conversation in the terminal, scripted or interactive

Run scripts from the repository root: python scripts/chat_discovery.py --business plumbing
"""
