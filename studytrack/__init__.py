"""StudyTrack: syllabus progress tracking with spaced repetition reviews."""
