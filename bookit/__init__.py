# -*- coding: utf-8 -*-
"""bookit
Version:  0.1.0
License:  MIT
About:
A terminal-based tool for booking billable hours against project
aliases, with local file-based storage.

usage: bookit [-h] [-c <file>] [--debug] for more help: bookit <command> -h ...

commands:
  (for more help: bookit <command> -h)
    book                book time for a project alias
    hours               view or delete booked hours
    alias               manage project aliases
    contractors         manage contractors
    version             show version info


Copyright © 2021 the bookit authors

Permission is hereby granted, free of charge, to any person obtaining a copy
of this software and associated documentation files (the "Software"), to deal
in the Software without restriction, including without limitation the rights
to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
copies of the Software, and to permit persons to whom the Software is
furnished to do so, subject to the following conditions:

The above copyright notice and this permission notice shall be included in all
copies or substantial portions of the Software.

THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
SOFTWARE.

"""

APP_NAME = "bookit"
APP_VERS = "0.1.0"
APP_COPYRIGHT = "Copyright © 2021 the bookit authors."
APP_LICENSE = "Released under MIT license."
