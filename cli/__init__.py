"""Command-line interface for mropath"""
