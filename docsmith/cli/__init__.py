"""Unified command-line interface for docsmith.

Usage:
    docsmith render <type> <record.json> [--inline] [--output-dir DIR]
    docsmith html <type> <record.json>
    docsmith export <type> <id> [--inline] [--output-dir DIR]
    docsmith statement <customer_id> [--date YYYY-MM-DD]
    docsmith serve [--host] [--port]
"""
