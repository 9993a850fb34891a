"""Process-organised daily to-do tracker."""
