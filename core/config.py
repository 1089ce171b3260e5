"""Configuration constants for auralingo application."""

# Award policy
AWARD_THRESHOLD = 90      # Minimum percentage that earns XP
BASE_AWARD = 100          # Flat XP for a qualifying session
PER_CORRECT_BONUS = 10    # Extra XP per correct answer
REPEAT_AWARDS = False     # Credit the same assessment id more than once

# Assessment modes
MASTERY_PREFIX = 'mastery'

# Storage keys
PROGRESS_KEY = 'user_progress'
FAVORITES_KEY = 'savedWords'

# Vocabulary tests
LEVELS = ('beginner', 'intermediate', 'advanced')
VOCAB_TEST_SIZE = 10      # Cards drawn from a level per test
VOCAB_TEST_OPTIONS = 4    # Correct translation + distractors

# Profile
WORDS_GOAL = 50           # Learned words for a full level bar
