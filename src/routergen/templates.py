"""Router template and its placeholder tokens."""

from __future__ import annotations

NETWORK_PLACEHOLDER = "@network"
MODULES_PLACEHOLDER = "@modules"
SELECTORS_PLACEHOLDER = "@selectors"

PLACEHOLDERS = (NETWORK_PLACEHOLDER, MODULES_PLACEHOLDER, SELECTORS_PLACEHOLDER)

# Module constants are emitted one tab deep, the lookup body four tabs deep.
MODULES_INDENT = 1
SELECTORS_INDENT = 4

ROUTER_TEMPLATE = """\
//SPDX-License-Identifier: MIT
pragma solidity ^0.8.0;

// --------------------------------------------------------------------------------
// --------------------------------------------------------------------------------
// GENERATED CODE - do not edit manually!!
// This code was generated by routergen for the @network network.
// --------------------------------------------------------------------------------
// --------------------------------------------------------------------------------

contract Router {
    error UnknownSelector(bytes4 sel);

@modules

    fallback() external payable {
        _forward();
    }

    receive() external payable {
        _forward();
    }

    function _forward() internal {
        // Lookup table: Function selector => implementation contract
        bytes4 sig4 = msg.sig;
        address implementation;

        assembly {
            let sig32 := shr(224, sig4)

            function findImplementation(sig) -> result {
@selectors
            }

            implementation := findImplementation(sig32)
        }

        if (implementation == address(0)) {
            revert UnknownSelector(sig4);
        }

        // Delegatecall to the implementation contract
        assembly {
            calldatacopy(0, 0, calldatasize())

            let result := delegatecall(gas(), implementation, 0, calldatasize(), 0, 0)
            returndatacopy(0, 0, returndatasize())

            switch result
            case 0 {
                revert(0, returndatasize())
            }
            default {
                return(0, returndatasize())
            }
        }
    }
}
"""
