"""
Live transcription core: transcript buffer, capture lifecycle, summarization
orchestration and session intent routing.
"""
