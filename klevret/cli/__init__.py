"""Interactive console: typed values, command patterns, handlers and the terminal shell."""