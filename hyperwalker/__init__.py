# Copyright (c) 2019 Riverbed Technology, Inc.
#
# This software is licensed under the terms and conditions of the MIT License
# accompanying the software ("License").  This software is distributed "AS IS"
# as set forth in the License.

from hyperwalker.builder import Client, Request, RequestChain
from hyperwalker.actions import ActionResult
from hyperwalker.connection import Connection
from hyperwalker.promise import Deferred, DeferredState, PromiseAdapter
from hyperwalker.representation import JsonRepresentation
from hyperwalker.template import resolve_template
from hyperwalker.walker import LinkWalker, WalkResult, WalkState
from hyperwalker.exceptions import *
