"""D-Solar site API"""
