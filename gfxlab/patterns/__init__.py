"""Command, Mediator and Strategy design-pattern demonstrations."""