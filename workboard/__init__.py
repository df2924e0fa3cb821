"""Work order scheduling board: schedule store, timeline projection and board view models."""
