"""motionflow — coroutine-driven animation orchestration.

Scenes are generator functions that animate named targets with style
tokens ("opacity-100 translate-y-0"). A scheduler plays them against a
frame clock with seeking by replay, a static estimator lays out a project
timeline from scene source alone, and a baker records every frame offline.
"""
