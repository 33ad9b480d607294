#!/usr/bin/env python
# -*- coding: utf-8 -*-

# This file is part of LidlConnect-API.
# Copyright (C) 2026 The LidlConnect-API authors.
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License version 3 as
# published by the Free Software Foundation.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.

# Progress goes to stderr so stdout is only the JSON document.
import sys

# All the shared functions are in this package.
from shared.configuration import loadConfiguration
from shared.lidlconnect import LidlConnect

# This script makes heavy use of JSON parsing.
import json

def main():
    # Load credentials.
    configuration = loadConfiguration()

    # Create a Lidl Connect object.
    print('* Logging into Lidl Connect.', file=sys.stderr)
    lidlConnect = LidlConnect(configuration)

    # Get the data, balance and tariff.
    print('* Downloading consumptions, balance and tariff.', file=sys.stderr)
    output = {
              'Consumptions': lidlConnect.getConsumptions(),
              'Balance': lidlConnect.getBalance(),
              'Tariff': lidlConnect.getTariff()
             }

    print(json.dumps(output))

if __name__ == '__main__':
    main()
