"""Command-line entry points for the expense tracker."""
