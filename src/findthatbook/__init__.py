# ABOUTME: FindThatBook turns a loosely remembered book description into ranked catalog matches.
# ABOUTME: The matching engine lives in findthatbook.matching; API clients in findthatbook.sources.
