"""Legacy difficulty files (_version 2.x), every timestamp is a beat
number and every key starts with an underscore"""
