"""Service layer: scan, rules, and config operations returning ServiceResult."""
