"""Shared helpers: byte order, character reading, deferred calls and TCP listening."""