"""Filecoin chain data types: messages, signed messages, node responses and keys."""