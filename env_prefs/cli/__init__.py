"""env-prefs - Command line interface"""
