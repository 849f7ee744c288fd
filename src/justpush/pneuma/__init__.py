"""
Pneuma - On-chain interaction layer for JustPush.

Provides the TRON client factory, build-artifact loading, and contract
call/transaction helpers for the JustPushV1 contract.

Uses httpx against the TRON full node HTTP API plus eth-abi for
parameter encoding, instead of a full TRON SDK.
"""
