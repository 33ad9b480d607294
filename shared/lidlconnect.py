#!/usr/bin/env python

# Rounding and day arithmetic for the consumption units.
import math
import logging

# Expiration dates are ISO-8601 timestamps.
from datetime import datetime, timezone

# Third party library to make HTTP(S) requests; "pip install requests" if getting import errors.
import requests

log = logging.getLogger(__name__)

def roundHalfAwayFromZero(value):
 # Python's round() is banker's rounding, the API consumers expect 2.5 -> 3.
 magnitude = abs(value)
 whole = math.floor(magnitude)

 # Comparing the fraction avoids 0.49999999999999994 + 0.5 rounding up to 1.
 if magnitude - whole >= 0.5:
  whole += 1

 return int(-whole if value < 0 else whole)

def number(value):
 # JSON null counts as zero.
 return value or 0

def percentOf(value, maximum):
 # Unlimited (or unreported) units have no meaningful percentage.
 if not maximum:
  return None

 return roundHalfAwayFromZero(value / maximum * 100)

def parseTimestamp(value):
 # Missing dates are reported as null.
 if not value:
  return None

 timestamp = datetime.fromisoformat(value)

 # A timestamp without an offset is UTC.
 if timestamp.tzinfo is None:
  timestamp = timestamp.replace(tzinfo=timezone.utc)

 return timestamp

def daysUntil(expirationDate, now=None):
 expiration = parseTimestamp(expirationDate)
 if expiration is None:
  return None

 if now is None:
  now = datetime.now(timezone.utc)

 hoursLeft = (expiration - now).total_seconds() / 3600
 return roundHalfAwayFromZero(hoursLeft / 24)

def extractPath(document, path, default=None):
 # Walk the dotted path one object at a time.
 for key in path.split('.'):
  if not isinstance(document, dict) or key not in document:
   return default
  document = document[key]

 return document

class LidlConnect:

 # Lidl Connect API.
 apiHost = 'https://api.lidl-connect.de'
 tokenURL = apiHost + '/api/token'
 graphQLURL = apiHost + '/api/graphql'

 # The API only accepts JSON bodies.
 jsonHeaders = {'Content-Type': 'application/json; charset=UTF-8', 'Accept': 'application/json'}

 # Seconds to wait on any single request.
 timeout = 30

 # The GraphQL queries are sent exactly as the Lidl Connect web application sends them.
 consumptionsQuery = 'query consumptions {\n  consumptions {\n    consumptionsForUnit {\n      consumed\n      unit\n      formattedUnit\n      type\n      description\n      expirationDate\n      left\n      max\n      __typename\n    }\n    __typename\n  }\n}\n'
 balanceQuery = 'query balanceInfo {\n  currentCustomer {\n    balance\n    __typename\n  }\n}\n'
 tariffQuery = 'query bookedTariff {\n  tariffs {\n    bookableTariffs {\n      bookableTariffs {\n        tariffId\n        __typename\n      }\n      __typename\n    }\n    bookedTariff {\n      tariffId\n      name\n      basicFee\n      statusKey\n      smsFlat\n      cancelable\n      tariffChangePossible\n      isPendingTariff\n      isSuspendedActive\n      phoneFlat\n      tariffState\n      renewContractDate\n      possibleChangingDate\n      terminationDate\n      changeTariffDate\n      runtime {\n        amount\n        unit\n        __typename\n      }\n      __typename\n    }\n    pendingTariff {\n      tariffId\n      name\n      tariffState\n      basicFee\n      tariffChangePossible\n      isPendingTariff\n      isSuspendedActive\n      cancelable\n      statusKey\n      smsFlat\n      phoneFlat\n      phoneFlat\n      tariffState\n      renewContractDate\n      possibleChangingDate\n      terminationDate\n      changeTariffDate\n      runtime {\n        amount\n        unit\n        __typename\n      }\n      __typename\n    }\n    __typename\n  }\n}\n'

 def __init__(self, configuration):
  # Session supports keep-alives.
  self.requestsSession = requests.Session()
  self.requestsSession.headers.update(LidlConnect.jsonHeaders)

  # Authenticate with Lidl Connect.
  self.token = self.getToken(configuration)

 def getToken(self, configuration):
  log.debug('Requesting token for %s', configuration.get('username'))

  # The whole configuration (including the client credentials) is the login body.
  response = self.requestsSession.post(url=LidlConnect.tokenURL, json=configuration, timeout=LidlConnect.timeout)
  response.raise_for_status()
  token = response.json()

  # Without an access token nothing else can be fetched.
  if not isinstance(token, dict) or not token.get('access_token'):
   raise ValueError('Failed to login to Lidl Connect.')

  return token

 def graphQL(self, operation, query):
  log.debug('Running GraphQL operation %s', operation)

  # Each request carries the bearer token.
  payload = {'operation': operation, 'variables': {}, 'query': query}
  response = self.requestsSession.post(url=LidlConnect.graphQLURL, headers={'Authorization': 'Bearer ' + self.token['access_token']}, json=payload, timeout=LidlConnect.timeout)
  response.raise_for_status()
  document = response.json()

  # GraphQL reports failures in the body rather than the status code.
  errors = extractPath(document, 'errors')
  if errors:
   message = extractPath(errors[0], 'message', errors[0])
   raise ValueError('Lidl Connect ' + operation + ' query failed (' + str(message) + ').')

  return document

 def getConsumptions(self, now=None):
  document = self.graphQL('consumptions', LidlConnect.consumptionsQuery)

  consumptions = []
  for unit in extractPath(document, 'data.consumptions.consumptionsForUnit') or []:
   consumed = number(unit.get('consumed'))
   left = number(unit.get('left'))
   maximum = number(unit.get('max'))

   consumptions.append({
                        'consumed': consumed,
                        'left': left,
                        'max': maximum,
                        'unit': unit.get('unit') or '',
                        'type': unit.get('type') or '',
                        'expirationDate': unit.get('expirationDate'),
                        'ConsumedPercent': percentOf(consumed, maximum),
                        'LeftPercent': percentOf(left, maximum),
                        'DaysLeft': daysUntil(unit.get('expirationDate'), now)
                        })

  return consumptions

 def getBalance(self):
  # In cents.
  return number(extractPath(self.graphQL('balanceInfo', LidlConnect.balanceQuery), 'data.currentCustomer.balance'))

 def getTariff(self):
  bookedTariff = extractPath(self.graphQL('bookedTariff', LidlConnect.tariffQuery), 'data.tariffs.bookedTariff') or {}

  # No renewal date is reported as null rather than a made-up date.
  return {
          'Name': bookedTariff.get('name') or '',
          'Fee': number(bookedTariff.get('basicFee')),
          'RenewDate': bookedTariff.get('renewContractDate')
          }
