"""Process invocation, error classification and output decoding for calibredb."""
