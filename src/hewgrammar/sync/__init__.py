"""
Grammar synchronization engine.

Pipeline (single pass, no state between runs):
    taxonomy -> scope groups -> regexes -> tree walk -> insertion
    -> change report -> coverage check
"""
