"""Commands of the structconf command-line tool."""
