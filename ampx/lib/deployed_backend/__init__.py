"""
Client for reading the outputs of a deployed Amplify backend
"""
