#!/usr/bin/env python

# The configuration is plain JSON.
import os
import json

# Values the Lidl Connect web application itself uses.
defaults = {'grant_type': 'password', 'client_id': 'lidl', 'client_secret': 'lidl'}

# Only these keys are sent to the token endpoint.
fields = ('grant_type', 'client_id', 'client_secret', 'username', 'password')

def getConfigurationPath():
 return os.path.join(os.path.expanduser('~'), '.config', 'lidl-connect', 'config.json')

def loadConfiguration(path=None):
 # Load credentials.
 with open(path or getConfigurationPath(), 'r') as in_file:
  stored = json.load(in_file)

 # Keys are matched case-insensitively.
 stored = {str(key).lower(): value for key, value in stored.items()}

 # Missing credentials are sent empty and the token endpoint rejects them.
 configuration = {}
 for field in fields:
  value = stored.get(field, defaults.get(field, ''))
  configuration[field] = '' if value is None else str(value)

 return configuration
