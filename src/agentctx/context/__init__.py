"""Context file generation, merging and sync.

The sync process:
1. Read the feature's plan.md once and derive a Summary
2. For each registered target, create it from the template if missing
3. Otherwise merge the Summary into its managed regions in place

Preserves all manually-written content outside the managed regions.
"""
