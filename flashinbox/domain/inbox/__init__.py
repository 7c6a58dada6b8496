"""Inbox bounded context: captured entries and the cards generated from them."""
