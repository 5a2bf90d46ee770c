'''Pluggable components of the tally engine, such as tie-breaking rules.'''
