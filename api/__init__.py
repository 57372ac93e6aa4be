"""Evidence Integrity - HTTP API"""
